"""Itinerary resolution engine — turns stored day blocks into a client-facing program.

Modules:
    config                   Display tables (block types, transport modes, bed types)
    block_classifier         Filters noise and partitions a day's blocks by role
    metadata_parser          Reads the JSON payload hidden in description_html
    accommodation_aggregator Merges consecutive nights into stays, builds hotel cards
    variant_resolver         Groups condition variants into tab sets
    meal_aggregator          Union of day-level and accommodation meal flags
    transport_enricher       Route / duration / distance summary for transport blocks
    day_labels               "Day 2 to 5" style labels and date ranges
    program_builder          Runs the steps above for every day of a trip

Pipeline (per day):
    classify_blocks → parse_*_meta → {MealAggregator, TransportEnricher,
    VariantResolver, accommodation cards} → DayView
    build_stays runs once across all days, in ascending day_number.
"""
