from app.schemas.itinerary import FormulaBlock
from app.services.itinerary.block_classifier import (
    block_display,
    classify_blocks,
    in_display_order,
    is_generic_name,
)


def _block(id: int, block_type: str | None, name: str = "Block", **kwargs) -> FormulaBlock:
    return FormulaBlock(id=id, name=name, block_type=block_type, **kwargs)


def test_classification_is_a_partition_of_displayable_blocks():
    blocks = [
        _block(1, "transport", sort_order=2),
        _block(2, "accommodation", sort_order=1),
        _block(3, "activity", sort_order=3),
        _block(4, "roadbook", sort_order=0),
        _block(5, "text", name="", description_html=None),
        _block(6, "service"),
        _block(7, "mystery"),
        _block(8, None, name="", description_html="<p>Just text</p>"),
    ]

    result = classify_blocks(blocks)
    ids = [b.id for b in result.all()]

    assert sorted(ids) == [1, 2, 3, 6, 7, 8]
    assert len(ids) == len(set(ids))
    assert [b.id for b in result.transport] == [1]
    assert [b.id for b in result.accommodation] == [2]
    assert sorted(b.id for b in result.regular) == [3, 6, 7, 8]


def test_whitespace_only_block_is_dropped():
    result = classify_blocks([_block(1, "text", name="   ", description_html="  \n")])
    assert result.all() == []


def test_generic_name_block_is_kept():
    result = classify_blocks([_block(1, "activity", name="New block")])
    assert [b.id for b in result.regular] == [1]
    assert is_generic_name(result.regular[0].name)


def test_sort_is_stable_on_equal_sort_order():
    blocks = [
        _block(10, "activity", sort_order=1),
        _block(11, "activity", sort_order=0),
        _block(12, "activity", sort_order=1),
        _block(13, "activity", sort_order=None),
    ]
    assert [b.id for b in in_display_order(blocks)] == [11, 13, 10, 12]
    assert [b.id for b in classify_blocks(blocks).regular] == [11, 13, 10, 12]


def test_is_generic_name():
    assert is_generic_name("Accommodation not set")
    assert is_generic_name("Hébergement non défini")
    assert is_generic_name(None)
    assert is_generic_name("")
    assert not is_generic_name("Sunset cruise on the Nile")


def test_unknown_block_type_gets_default_display():
    assert block_display("activity").label == "Activity"
    assert block_display("bungee").label == "Note"
    assert block_display(None).label == "Note"
