import pytest
from returns.result import Failure, Success

from conftest import make_design
from tailor_store.core.domain.model.design import ChildType
from tailor_store.core.domain.model.errors import InvalidConstraint
from tailor_store.core.domain.service.catalog_query_service import (
    CatalogQueryDeps,
    CatalogQueryService,
    constraint_for,
    filter_catalog,
)
from tailor_store.core.ports.inbound.browse_catalog import BrowseMode, BrowseRequest


@pytest.fixture()
def catalog(designs, stocked):
    stocked(
        make_design("dad-boy", {"men": {"XL": 2}, "boys": {"4-5": 1}}, created_at=5),
        make_design("mum-girl", {"women": {"L": 1}, "girls": {"2-3": 4}}, created_at=4),
        make_design(
            "couple",
            {"men": {"L": 1}, "women": {"M": 1}},
            name="Indigo Block",
            fabric="Cotton",
            created_at=3,
        ),
        make_design("kids-bare", child_type=ChildType.UNISEX, created_at=2),
        make_design("boys-only", {"boys": {"9-10": 1}}, child_type=ChildType.BOYS, created_at=1),
    )
    return CatalogQueryService(CatalogQueryDeps(designs=designs))


def _ids(result):
    assert isinstance(result, Success)
    return [d.id for d in result.unwrap()]


def test_all_mode_without_any_size_shows_nothing(catalog):
    assert _ids(catalog.browse(BrowseRequest())) == []


def test_all_mode_filters_on_picked_sizes(catalog):
    res = catalog.browse(BrowseRequest(father="XL"))
    assert _ids(res) == ["dad-boy"]


def test_father_son_mode_needs_stock_in_both_cuts(catalog):
    assert _ids(catalog.browse(BrowseRequest(mode=BrowseMode.FATHER_SON))) == ["dad-boy"]


def test_combo_mode_with_exact_sizes(catalog):
    req = BrowseRequest(mode=BrowseMode.COUPLE, father="L", mother="M")
    assert _ids(catalog.browse(req)) == ["couple"]

    req = BrowseRequest(mode=BrowseMode.COUPLE, father="XL", mother="M")
    assert _ids(catalog.browse(req)) == []


def test_sizes_for_members_outside_the_mode_are_ignored(catalog):
    req = BrowseRequest(mode=BrowseMode.MOTHER_DAUGHTER, father="3XL", sons=["13-14"])
    assert _ids(catalog.browse(req)) == ["mum-girl"]


def test_boys_mode(catalog):
    assert _ids(catalog.browse(BrowseRequest(mode=BrowseMode.BOYS))) == ["dad-boy", "boys-only"]
    req = BrowseRequest(mode=BrowseMode.BOYS, sons=["9-10"])
    assert _ids(catalog.browse(req)) == ["boys-only"]


def test_unisex_mode_waives_kid_stock_for_unisex_designs(catalog):
    assert _ids(catalog.browse(BrowseRequest(mode=BrowseMode.UNISEX))) == ["kids-bare"]


def test_search_narrows_by_name_color_or_fabric(catalog):
    req = BrowseRequest(mode=BrowseMode.COUPLE, search="cotton")
    assert _ids(catalog.browse(req)) == ["couple"]
    req = BrowseRequest(mode=BrowseMode.COUPLE, search="velvet")
    assert _ids(catalog.browse(req)) == []


def test_invalid_size_is_a_failure(catalog):
    res = catalog.browse(BrowseRequest(mode=BrowseMode.FATHER_SON, father="4-5"))
    assert isinstance(res, Failure)
    assert isinstance(res.failure(), InvalidConstraint)


def test_constraint_for_combo_mode_is_active_on_its_categories():
    c = constraint_for(BrowseRequest(mode=BrowseMode.FULL_FAMILY))
    assert {cat.value for cat in c.active} == {"men", "women", "boys", "girls"}
    assert c.sizes == {}


def test_filter_catalog_is_pure_over_a_list():
    a = make_design("a", {"girls": {"5-6": 1}})
    b = make_design("b")
    req = BrowseRequest(mode=BrowseMode.GIRLS, daughters=["5-6"])
    assert filter_catalog([b, a], req) == [a]
