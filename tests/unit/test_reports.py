from casemap.common.models import AggregateStats, RegionCollection, RegionRecord
from casemap.pipeline.reports import describe_record, format_count, load_summary, search_summary


def _record():
    return RegionRecord(
        subregion="Hubei",
        region="China",
        latitude="30.9756",
        longitude="112.2707",
        confirmed=(444, 67801),
        deaths=(17, 3111),
    )


def test_format_count_uses_thousands_separator():
    assert format_count(1234567) == "1,234,567"
    assert format_count(0) == "0"
    assert format_count(None) == "n/a"


def test_describe_record_reads_latest_values():
    payload = describe_record(_record())
    assert payload["label"] == "Hubei"
    assert payload["confirmed"] == 67801
    assert payload["confirmed_label"] == "67,801"
    assert payload["recovered"] is None
    assert payload["recovered_label"] == "n/a"

    earlier = describe_record(_record(), days_ago=1)
    assert earlier["deaths"] == 17


def test_load_summary_reports_empty_state():
    summary = load_summary(RegionCollection())
    assert summary["status"] == "empty"
    assert summary["max_confirmed"] is None
    assert summary["top_regions"] == []


def test_load_summary_reports_loaded_state():
    collection = RegionCollection(records=(_record(),), stats=AggregateStats(merged_regions=2, kept_regions=1))
    summary = load_summary(collection, top=5)
    assert summary["status"] == "loaded"
    assert summary["max_confirmed"] == 67801
    assert summary["stats"]["merged_regions"] == 2


def test_search_summary_distinguishes_inactive():
    assert search_summary("", None) == {"query": "", "active": False, "results": None}
    assert search_summary("x", [])["results"] == []
