"""Block classifier — filters noise and splits a day's blocks by role."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from app.schemas.itinerary import FormulaBlock
from app.services.itinerary.config import (
    BLOCK_TYPE_DISPLAY,
    DEFAULT_BLOCK_DISPLAY,
    GENERIC_BLOCK_NAMES,
    BlockDisplay,
)

logger = logging.getLogger(__name__)


@dataclass
class ClassifiedBlocks:
    transport: list[FormulaBlock] = field(default_factory=list)
    accommodation: list[FormulaBlock] = field(default_factory=list)
    regular: list[FormulaBlock] = field(default_factory=list)

    def all(self) -> list[FormulaBlock]:
        return [*self.transport, *self.accommodation, *self.regular]


def in_display_order(blocks: Iterable[FormulaBlock]) -> list[FormulaBlock]:
    """Order blocks by sort_order ascending; equal keys keep their input order.

    Every component that iterates a day's blocks goes through this.
    """
    return sorted(blocks, key=lambda b: b.sort_order or 0)


def is_generic_name(name: str | None) -> bool:
    """True when the name is empty or an editor placeholder."""
    if not name or not name.strip():
        return True
    return name.strip() in GENERIC_BLOCK_NAMES


def is_displayable(block: FormulaBlock) -> bool:
    if block.block_type == "roadbook":
        return False
    has_name = bool(block.name and block.name.strip())
    has_text = bool(block.description_html and block.description_html.strip())
    return has_name or has_text


def classify_blocks(blocks: Iterable[FormulaBlock]) -> ClassifiedBlocks:
    """Drop roadbook/empty blocks, then partition the rest by role.

    Unknown or missing block types land in ``regular``.
    """
    result = ClassifiedBlocks()
    dropped = 0
    for block in in_display_order(blocks):
        if not is_displayable(block):
            dropped += 1
            continue
        if block.block_type == "transport":
            result.transport.append(block)
        elif block.block_type == "accommodation":
            result.accommodation.append(block)
        else:
            result.regular.append(block)

    if dropped:
        logger.debug(f"Dropped {dropped} non-displayable blocks")
    return result


def block_display(block_type: str | None) -> BlockDisplay:
    return BLOCK_TYPE_DISPLAY.get(block_type or "text", DEFAULT_BLOCK_DISPLAY)
