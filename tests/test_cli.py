# File: tests/test_cli.py
"""Тесты для CLI (`page_scout.cli`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `config`, `--version`, а также обработку ошибок.
"""
import importlib
import json
from collections import Counter

import pytest
from click.testing import CliRunner

from page_scout.cli import cli
from page_scout.crawler.crawler import CrawlStats
from page_scout.crawler.models import PageRecord
from page_scout.logger import init_logging

# page_scout.cli как атрибут пакета - это click-группа, поэтому берём сам модуль
cli_module = importlib.import_module("page_scout.cli")


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI перенастраивает логгер на поток CliRunner; возвращаем stdout после теста."""
    yield
    init_logging()


@pytest.fixture()
def calls():
    return []


@pytest.fixture(autouse=True)
def patch_start_crawl(monkeypatch, calls):
    """Патчим start_crawl: возвращаем готовую статистику без сети и БД."""

    async def fake_crawl(cfg):
        calls.append(cfg)
        return CrawlStats(
            visited=2,
            stored=1,
            failed=1,
            total_queued=3,
            pending=1,
            duration=0.12345,
            failures=Counter({"http_status": 1}),
            pages=[PageRecord(str(cfg.seed_url), title="<Home>", body="hello")],
        )

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)


@pytest.fixture()
def cfg_file(tmp_path, monkeypatch):
    monkeypatch.delenv("MONGODB_URI", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        json.dumps(
            {
                "seed_url": "https://example.com",
                "budget": 10,
                "delay": 0,
                "sink": "mongo",
                "mongodb_uri": "mongodb://user:secret@db:27017",
            }
        ),
        encoding="utf-8",
    )
    return path


def report_from(output: str) -> dict:
    # первая строка - "Starting crawl from: ..."
    first, _, rest = output.partition("\n")
    assert first.startswith("Starting crawl from:")
    return json.loads(rest)


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "PageScout" in result.output


def test_show_config_masks_uri(cfg_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["budget"] == 10
    assert data["mongodb_uri"] == "***"
    assert "secret" not in result.output


def test_crawl_stdout(cfg_file, calls):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl"])
    assert result.exit_code == 0
    report = report_from(result.output)
    assert report["summary"]["visited"] == 2
    assert report["summary"]["duration"] == 0.123
    assert report["failures"] == {"http_status": 1}
    assert report["pages"][0]["title"] == "<Home>"
    assert len(calls) == 1


def test_crawl_overrides_reach_config(cfg_file, calls):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "--config", str(cfg_file), "crawl", "https://other.example",
            "--budget", "3", "--delay", "0.5", "--timeout", "4", "--dry-run",
        ],
    )
    assert result.exit_code == 0
    cfg = calls[0]
    assert str(cfg.seed_url) == "https://other.example/"
    assert cfg.budget == 3
    assert cfg.delay == 0.5
    assert cfg.timeout == 4.0
    assert cfg.sink == "memory"
    assert "Starting crawl from: https://other.example" in result.output


def test_crawl_jsonl_sink_option(cfg_file, calls, tmp_path):
    out = tmp_path / "pages.jsonl"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--config", str(cfg_file), "crawl", "--sink", "jsonl", "--output", str(out)]
    )
    assert result.exit_code == 0
    assert calls[0].sink == "jsonl"
    assert calls[0].output_path == out


def test_crawl_json_file(cfg_file, tmp_path):
    out = tmp_path / "reports" / "out.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl", "--json", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["summary"]["stored"] == 1
    assert "JSON report:" in result.output


def test_crawl_html_file(cfg_file, tmp_path):
    out = tmp_path / "report.html"
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl", "--html", str(out)])
    assert result.exit_code == 0
    html = out.read_text(encoding="utf-8")
    assert "&lt;Home&gt;" in html
    assert "http_status" in html


def test_crawl_invalid_override(cfg_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl", "--budget", "0"])
    assert result.exit_code == 1
    assert "Некорректные параметры" in result.output


def test_crawl_failure_exits_nonzero(cfg_file, monkeypatch):
    async def broken(cfg):
        raise ValueError("MONGODB_URI is not set")

    monkeypatch.setattr(cli_module, "start_crawl", broken)

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl"])
    assert result.exit_code == 1
    assert "MONGODB_URI is not set" in result.output


def test_bad_config_exits(tmp_path):
    cfg_file = tmp_path / "broken.yaml"
    cfg_file.write_text("budget: 5\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output
