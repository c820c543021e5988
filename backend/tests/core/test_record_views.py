"""Tests for filter_records / compute_display_stats — pure, no IO."""

from dataclasses import dataclass

from gdp_records.core.domain_types import Region
from gdp_records.core.record_views import (
    DisplayStats, RecordFilter, compute_display_stats, filter_records,
)


@dataclass
class _Rec:
    country: str
    region: str
    year: int


MIXED = [
    _Rec("Japan", "Asia", 2020),
    _Rec("Germany", "Europe", 2020),
    _Rec("India", "Asia", 2019),
    _Rec("Kenya", "Africa", 2021),
    _Rec("China", "Asia", 2021),
]


def test_region_filter_returns_matching_subset_in_order():
    result = filter_records(MIXED, RecordFilter(region="Asia"))
    assert [r.country for r in result] == ["Japan", "India", "China"]


def test_country_filter_is_case_insensitive_substring():
    result = filter_records(MIXED, RecordFilter(country="  aN "))
    assert [r.country for r in result] == ["Japan", "Germany"]


def test_year_filter_is_exact_string_match():
    assert [r.country for r in filter_records(MIXED, RecordFilter(year="2021"))] == [
        "Kenya", "China",
    ]
    assert filter_records(MIXED, RecordFilter(year="202")) == []


def test_criteria_combine_as_conjunction():
    result = filter_records(MIXED, RecordFilter(country="i", region="Asia", year="2021"))
    assert [r.country for r in result] == ["China"]


def test_empty_filter_returns_copy_of_everything():
    result = filter_records(MIXED, RecordFilter())
    assert result == MIXED
    assert result is not MIXED
    assert RecordFilter().is_empty


def test_region_enum_values_are_compared_by_label():
    recs = [_Rec("Japan", Region.ASIA, 2020), _Rec("France", Region.EUROPE, 2020)]
    assert [r.country for r in filter_records(recs, RecordFilter(region="Asia"))] == ["Japan"]


def test_display_stats_count_distinct_years_and_regions():
    assert compute_display_stats(MIXED) == DisplayStats(total=5, years=3, regions=3)


def test_display_stats_on_empty_list():
    assert compute_display_stats([]) == DisplayStats(total=0, years=0, regions=0)
