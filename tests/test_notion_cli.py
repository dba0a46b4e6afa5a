"""Tests for the notion settings CLI."""

from pathlib import Path

import pytest

from lifestream.notion.config import NotionConfig, load_notion_config
from lifestream.notion_cli import create_parser, run_notion_cli
from lifestream.storage import LocalStorage


@pytest.fixture
def home(tmp_path: Path, monkeypatch) -> Path:
    data_dir = tmp_path / "home"
    monkeypatch.setenv("LIFESTREAM_HOME", str(data_dir))
    return data_dir


def saved(home: Path) -> NotionConfig | None:
    return load_notion_config(LocalStorage(home))


def test_no_command_prints_help(home: Path, capsys):
    assert run_notion_cli([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_show_unconfigured(home: Path, capsys):
    assert run_notion_cli(["show"]) == 0
    assert "not configured" in capsys.readouterr().out


def test_set_then_show(home: Path, capsys):
    assert run_notion_cli([
        "set", "--api-key", "secret_1234567890abcd", "--records-db", "rec",
    ]) == 0
    assert saved(home) == NotionConfig(api_key="secret_1234567890abcd", records_database_id="rec")

    capsys.readouterr()
    run_notion_cli(["show"])
    out = capsys.readouterr().out
    assert "secret...abcd" in out
    assert "1234567890" not in out
    assert "goal matching off" in out


def test_set_is_partial_update(home: Path):
    run_notion_cli(["set", "--api-key", "k", "--records-db", "rec"])
    run_notion_cli(["set", "--goals-db", "goals", "--proxy-url", "http://localhost:8080/notion/"])

    assert saved(home) == NotionConfig(
        api_key="k",
        records_database_id="rec",
        goals_database_id="goals",
        proxy_url="http://localhost:8080/notion/",
    )


def test_empty_proxy_url_unsets(home: Path):
    run_notion_cli(["set", "--proxy-url", "http://relay/notion"])
    run_notion_cli(["set", "--proxy-url", ""])
    assert saved(home).proxy_url is None


def test_show_reports_missing_fields(home: Path, capsys):
    run_notion_cli(["set", "--api-key", "k"])
    capsys.readouterr()
    run_notion_cli(["show"])
    assert "missing: records_database_id" in capsys.readouterr().out


def test_clear(home: Path):
    run_notion_cli(["set", "--api-key", "k"])
    assert run_notion_cli(["clear"]) == 0
    assert saved(home) is None


def test_parser_commands():
    parser = create_parser()
    args = parser.parse_args(["set", "--records-db", "r"])
    assert args.command == "set"
    assert args.records_db == "r"
    assert args.api_key is None
