import json
from pathlib import Path

import pytest

from casemap import cli
from casemap.cli import main, parse_args, run_command
from casemap.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS

HEADER = "Province/State,Country/Region,Lat,Long,3/1/20,3/2/20"


def _write_payloads(directory: Path) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "time_series_covid19_confirmed_global.csv").write_text(
        f'{HEADER}\nHubei,China,30.9756,112.2707,66907,67103\n,"Korea, South",36.0,128.0,3736,4335\n,Chile,-35.7,-71.5,0,1\n',
        encoding="utf-8",
    )
    (directory / "time_series_covid19_deaths_global.csv").write_text(
        f"{HEADER}\nHubei,China,30.9756,112.2707,2803,2835\n", encoding="utf-8"
    )
    (directory / "time_series_covid19_recovered_global.csv").write_text(
        f"{HEADER}\nHubei,China,30.9756,112.2707,31536,33934\n", encoding="utf-8"
    )


@pytest.mark.integration
def test_cli_load_prints_ranked_summary(tmp_path: Path, capsys):
    _write_payloads(tmp_path / "csv")
    args = parse_args(["load", "--payload-dir", str(tmp_path / "csv"), "--run-id", "load-test"])

    assert run_command(args) == EXIT_SUCCESS

    summary = json.loads(capsys.readouterr().out)
    assert summary["status"] == "loaded"
    assert summary["max_confirmed"] == 67103
    assert [row["label"] for row in summary["top_regions"]] == ["Hubei", "Korea, South", "Chile"]
    assert summary["top_regions"][0]["confirmed_label"] == "67,103"


@pytest.mark.integration
def test_cli_search_prints_matches(tmp_path: Path, capsys):
    _write_payloads(tmp_path / "csv")
    args = parse_args(["search", "Chi", "--payload-dir", str(tmp_path / "csv")])

    assert run_command(args) == EXIT_SUCCESS

    output = json.loads(capsys.readouterr().out)
    assert output["active"] is True
    assert [row["region"] for row in output["results"]] == ["China", "Chile"]


@pytest.mark.integration
def test_cli_search_without_query_is_inactive(tmp_path: Path, capsys):
    _write_payloads(tmp_path / "csv")
    args = parse_args(["search", "--payload-dir", str(tmp_path / "csv")])

    assert run_command(args) == EXIT_SUCCESS
    assert json.loads(capsys.readouterr().out)["results"] is None


@pytest.mark.integration
def test_cli_missing_payloads_is_hard_failure(tmp_path: Path, capsys):
    args = parse_args(["load", "--payload-dir", str(tmp_path / "empty")])

    assert run_command(args) == EXIT_HARD_FAIL
    assert capsys.readouterr().out == ""


@pytest.mark.integration
def test_cli_main_returns_hard_failure_for_undecodable_payloads(tmp_path: Path, capsys):
    payload_dir = tmp_path / "csv"
    _write_payloads(payload_dir)
    for path in payload_dir.iterdir():
        path.write_bytes(b"\xff\xfe" + path.read_bytes())

    assert main(["load", "--payload-dir", str(payload_dir)]) == EXIT_HARD_FAIL
    assert capsys.readouterr().out == ""


@pytest.mark.integration
def test_cli_unexpected_error_is_hard_failure(tmp_path: Path, monkeypatch, capsys):
    _write_payloads(tmp_path / "csv")

    def _explode(*_args, **_kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "load_collection", _explode)

    assert main(["load", "--payload-dir", str(tmp_path / "csv")]) == EXIT_HARD_FAIL
    assert capsys.readouterr().out == ""
