from casemap.common.models import RegionRecord
from casemap.search.index import matches, normalise_query, search


def _record(region, subregion="", confirmed=(1,)):
    return RegionRecord(subregion=subregion, region=region, latitude="0", longitude="0", confirmed=confirmed)


COLLECTION = [
    _record("China", "Hubei"),
    _record("Italy"),
    _record("Korea, South"),
    _record("US", "King County, WA"),
    _record("Chile"),
]


def test_partial_query_matches_region():
    results = search(COLLECTION, "Chi")
    assert [record.region for record in results] == ["China", "Chile"]


def test_match_is_case_insensitive_and_checks_subregion():
    assert [record.region for record in search(COLLECTION, "hUBe")] == ["China"]
    assert [record.region for record in search(COLLECTION, "  king ")] == ["US"]


def test_match_uses_comma_separated_tokens():
    assert matches(COLLECTION[2], "south")
    assert matches(COLLECTION[3], "wa")
    assert not matches(COLLECTION[2], "korea, south")


def test_empty_subregion_never_matches_everything():
    assert search(COLLECTION, "zzz") == []
    assert not matches(_record("Italy"), "Italy and more")


def test_empty_or_blank_query_is_inactive():
    assert search(COLLECTION, "") is None
    assert search(COLLECTION, "   ") is None
    assert search(COLLECTION, None) is None
    assert normalise_query("  ") is None


def test_search_found_nothing_is_an_empty_list():
    assert search(COLLECTION, "Atlantis") == []


def test_results_are_bounded_and_keep_collection_order():
    collection = [_record(f"Region {index}", confirmed=(100 - index,)) for index in range(20)]
    results = search(collection, "region")

    assert len(results) == 6
    assert results == collection[:6]


def test_custom_limit():
    assert len(search(COLLECTION, "i", limit=2)) == 2
