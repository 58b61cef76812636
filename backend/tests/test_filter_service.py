# backend/tests/test_filter_service.py

from types import SimpleNamespace

import pytest

from app.db.relations import reconstruct_related
from app.schemas.filter_schema import CategoryFilter, ProductFilter, SubCategoryFilter
from app.services.filter_service import (
    apply_default_color,
    available_subcategories,
    ensure_single_default,
    filter_categories,
    filter_products,
    filter_subcategories,
)

RUGS = {"id": 1, "name": "Rugs"}
CURTAINS = {"id": 2, "name": "Curtains"}

WOOL = {"id": 10, "name": "Wool", "description": None, "category_id": 1, "category": RUGS,
        "regions": [{"id": 1}]}
SILK = {"id": 11, "name": "Silk", "description": "Hand made", "category_id": 1, "category": RUGS,
        "regions": [{"id": 2}]}
SHEER = {"id": 20, "name": "Sheer", "description": None, "category_id": 2, "category": CURTAINS,
         "regions": [{"id": 1}, {"id": 3}]}

PRODUCTS = [
    {"id": 100, "name": "Nomad", "description": "Wool rug", "reference": "N-1",
     "subcategory_id": 10, "subcategory": WOOL, "regions": [{"id": 1}]},
    {"id": 101, "name": "Dune", "description": None, "reference": "D-7",
     "subcategory_id": 11, "subcategory": SILK, "regions": [{"id": 2}]},
    {"id": 102, "name": "Veil", "description": "Light curtain", "reference": None,
     "subcategory_id": 20, "subcategory": SHEER, "regions": []},
    {"id": 103, "name": "Orphan", "description": None, "reference": None,
     "subcategory_id": None, "subcategory": None, "regions": [{"id": 3}]},
]


def _ids(items):
    return [item["id"] for item in items]


# ========================================
# RECONSTRUCCIÓN DE RELACIONES
# ========================================

def test_reconstruct_drops_rows_with_missing_target():
    rows = [{"region": {"id": 1}}, {"region": None}, {"region": {"id": 2}}]
    assert reconstruct_related(rows, "region") == [{"id": 1}, {"id": 2}]


def test_reconstruct_works_with_objects_and_empty_input():
    rows = [SimpleNamespace(category="a"), SimpleNamespace(category=None)]
    assert reconstruct_related(rows, "category") == ["a"]
    assert reconstruct_related(None, "category") == []
    assert reconstruct_related([], "category") == []


# ========================================
# FILTROS
# ========================================

def test_empty_criteria_returns_everything():
    assert _ids(filter_products(PRODUCTS, ProductFilter())) == [100, 101, 102, 103]


def test_text_search_is_case_insensitive_over_name_description_and_reference():
    assert _ids(filter_products(PRODUCTS, ProductFilter(search_query="RUG"))) == [100]
    assert _ids(filter_products(PRODUCTS, ProductFilter(search_query="d-7"))) == [101]
    assert _ids(filter_products(PRODUCTS, ProductFilter(search_query="zzz"))) == []


def test_region_filter_uses_or_semantics():
    result = filter_products(PRODUCTS, ProductFilter(region_ids=[1, 2]))
    assert _ids(result) == [100, 101]


def test_category_filter_uses_parent_of_subcategory():
    result = filter_products(PRODUCTS, ProductFilter(category_id=1))
    assert _ids(result) == [100, 101]


def test_all_predicates_are_combined():
    criteria = ProductFilter(search_query="n", category_id=1, subcategory_id=11, region_ids=[2])
    assert _ids(filter_products(PRODUCTS, criteria)) == [101]


def test_filtering_is_idempotent():
    criteria = ProductFilter(search_query="o", region_ids=[1, 3])
    once = filter_products(PRODUCTS, criteria)
    assert filter_products(once, criteria) == once


def test_subcategory_search_matches_parent_category_name():
    result = filter_subcategories([WOOL, SILK, SHEER], SubCategoryFilter(search_query="rug"))
    assert _ids(result) == [10, 11]


def test_subcategory_filters_by_category_and_region():
    criteria = SubCategoryFilter(category_id=2, region_ids=[3])
    assert _ids(filter_subcategories([WOOL, SILK, SHEER], criteria)) == [20]


def test_category_filter_by_text_and_region():
    categories = [
        {"id": 1, "name": "Rugs", "description": "Floor", "regions": [{"id": 1}]},
        {"id": 2, "name": "Curtains", "description": None, "regions": [{"id": 2}]},
    ]
    assert _ids(filter_categories(categories, CategoryFilter(search_query="floor"))) == [1]
    assert _ids(filter_categories(categories, CategoryFilter(region_ids=[2]))) == [2]


# ========================================
# SELECCIÓN EN CASCADA
# ========================================

def test_changing_category_clears_subcategory():
    state = ProductFilter(category_id=1).select_subcategory(11)
    changed = state.select_category(2)
    assert changed.category_id == 2
    assert changed.subcategory_id is None
    assert state.subcategory_id == 11


def test_available_subcategories_follow_category():
    assert _ids(available_subcategories([WOOL, SILK, SHEER], 1)) == [10, 11]
    assert _ids(available_subcategories([WOOL, SILK, SHEER], None)) == [10, 11, 20]


def test_normalized_drops_subcategory_from_other_category():
    state = ProductFilter(category_id=2, subcategory_id=11)
    assert state.normalized([WOOL, SILK, SHEER]).subcategory_id is None

    consistent = ProductFilter(category_id=1, subcategory_id=11)
    assert consistent.normalized([WOOL, SILK, SHEER]) == consistent


def test_cleared_resets_every_criterion():
    state = ProductFilter(search_query="x", region_ids=[1], category_id=1, subcategory_id=10)
    assert state.cleared() == ProductFilter()


def test_none_search_query_is_empty():
    assert CategoryFilter(search_query=None).search_query == ""


# ========================================
# COLOR POR DEFECTO
# ========================================

def test_apply_default_color_leaves_exactly_one_default():
    colors = [{"name": "Red", "is_default": True}, {"name": "Blue", "is_default": False},
              {"name": "Green", "is_default": True}]
    apply_default_color(colors, 1)
    assert [c["is_default"] for c in colors] == [False, True, False]


def test_apply_default_color_rejects_out_of_range_index():
    with pytest.raises(IndexError):
        apply_default_color([{"name": "Red", "is_default": False}], 3)


def test_ensure_single_default_keeps_last_flagged():
    colors = [{"name": "Red", "is_default": True}, {"name": "Blue", "is_default": True},
              {"name": "Green", "is_default": False}]
    ensure_single_default(colors)
    assert [c["is_default"] for c in colors] == [False, True, False]


def test_ensure_single_default_without_flags_changes_nothing():
    colors = [{"name": "Red", "is_default": False}]
    assert ensure_single_default(colors) == [{"name": "Red", "is_default": False}]
