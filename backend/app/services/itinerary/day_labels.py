"""Day labels and calendar dates for a trip day or a multi-day range.

    (1, None, 2025-03-15) -> ("Day 1", "15 March 2025")
    (2, 3, 2025-03-15)    -> ("Days 2 and 3", "16-17 March 2025")
    (2, 5, 2025-03-15)    -> ("Days 2 to 5", "16-19 March 2025")
    (1, None, None)       -> ("Day 1", None)
"""

from datetime import date, timedelta


def _format_date(d: date) -> str:
    return f"{d.day} {d.strftime('%B')} {d.year}"


def _is_single(day_number: int, day_number_end: int | None) -> bool:
    return not day_number_end or day_number_end == day_number


def format_day_label(
    day_number: int, day_number_end: int | None, start_date: date | None
) -> tuple[str, str | None]:
    if _is_single(day_number, day_number_end):
        day_label = f"Day {day_number}"
    elif day_number_end == day_number + 1:
        day_label = f"Days {day_number} and {day_number_end}"
    else:
        day_label = f"Days {day_number} to {day_number_end}"

    if start_date is None:
        return day_label, None

    first = start_date + timedelta(days=day_number - 1)
    if _is_single(day_number, day_number_end):
        return day_label, _format_date(first)

    last = start_date + timedelta(days=day_number_end - 1)
    if (first.year, first.month) == (last.year, last.month):
        date_label = f"{first.day}-{last.day} {first.strftime('%B')} {first.year}"
    elif first.year == last.year:
        date_label = f"{first.day} {first.strftime('%B')} - {_format_date(last)}"
    else:
        date_label = f"{_format_date(first)} - {_format_date(last)}"
    return day_label, date_label


def day_badge(day_number: int, day_number_end: int | None = None) -> str:
    """Short badge: 'D1', 'D2-5'."""
    if _is_single(day_number, day_number_end):
        return f"D{day_number}"
    return f"D{day_number}-{day_number_end}"


def location_line(location_from: str | None, location_to: str | None) -> str | None:
    if location_from and location_to and location_from != location_to:
        return f"{location_from} → {location_to}"
    return location_from or location_to or None
