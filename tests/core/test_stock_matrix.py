import pytest

from tailor_store.core.domain.model.errors import InvalidConstraint
from tailor_store.core.domain.model.stock import (
    ADULT_SIZES,
    KIDS_SIZES,
    Category,
    StockMatrix,
    check_size,
    sizes_for,
)


def test_empty_matrix_has_every_cell_at_zero():
    m = StockMatrix.empty()
    cells = list(m.cells())
    assert len(cells) == 2 * len(ADULT_SIZES) + 2 * len(KIDS_SIZES)
    assert all(n == 0 for _, _, n in cells)
    assert m.total_units() == 0


def test_from_dict_fills_missing_cells_with_zero():
    m = StockMatrix.from_dict({"men": {"XXL": 9}, "boys": {"4-5": 2}})
    assert m.get(Category.MEN, "XXL") == 9
    assert m.get(Category.MEN, "M") == 0
    assert m.get(Category.WOMEN, "L") == 0
    assert m.to_dict()["boys"]["4-5"] == 2
    assert set(m.to_dict()) == {"men", "women", "boys", "girls"}


def test_set_and_adjust_clamp_at_zero():
    m = StockMatrix.empty()
    m.set(Category.GIRLS, "2-3", -5)
    assert m.get(Category.GIRLS, "2-3") == 0

    m.set(Category.GIRLS, "2-3", 2)
    assert m.adjust(Category.GIRLS, "2-3", -3) == 0
    assert m.adjust(Category.GIRLS, "2-3", 4) == 4


def test_copy_is_independent():
    m = StockMatrix.from_dict({"women": {"L": 1}})
    c = m.copy()
    c.adjust(Category.WOMEN, "L", -1)
    assert m.get(Category.WOMEN, "L") == 1
    assert c.get(Category.WOMEN, "L") == 0
    assert m != c


@pytest.mark.parametrize(
    "category,size",
    [
        ("men", "4-5"),       # kids size on an adult cut
        ("boys", "XL"),       # adult size on a kids cut
        ("boys", "8-9"),      # not in the kids ladder
        ("women", "S"),
    ],
)
def test_sizes_outside_the_ladder_are_rejected(category, size):
    with pytest.raises(InvalidConstraint):
        check_size(category, size)


def test_unknown_category_is_rejected():
    with pytest.raises(InvalidConstraint):
        Category.parse("toddlers")


def test_category_parse_normalizes_case_and_whitespace():
    assert Category.parse(" Boys ") is Category.BOYS
    assert check_size("MEN", "3XL") is Category.MEN


def test_has_any_stock_per_category():
    m = StockMatrix.from_dict({"girls": {"11-12": 1}})
    assert m.has_any_stock(Category.GIRLS)
    assert not m.has_any_stock(Category.BOYS)
    assert m.has_any_stock("girls")


def test_size_ladders():
    assert sizes_for(Category.MEN) == ("M", "L", "XL", "XXL", "3XL")
    assert "8-9" not in sizes_for(Category.BOYS)
    assert sizes_for(Category.GIRLS)[-1] == "13-14"
