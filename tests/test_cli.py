"""Tests for the CLI (`wcag_scout.cli`) using click.testing.CliRunner.
Cover `audit`, `discover`, `config`, `--version`, URL resolution and error handling.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner

from conftest import make_violation
from wcag_scout.aggregator import aggregate_results
from wcag_scout.cli import cli
from wcag_scout.crawler.models import AuditRecord
from wcag_scout.errors import AxeSourceError
from wcag_scout.logger import configure

cli_module = importlib.import_module("wcag_scout.cli")


@pytest.fixture(autouse=True)
def clear_site_url(monkeypatch):
    monkeypatch.delenv("SITE_URL", raising=False)


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI binds log handlers to CliRunner's stream; rebind them afterwards."""
    yield
    configure()


@pytest.fixture()
def scan_calls(monkeypatch):
    """Patch start_scan to return a canned report without launching a browser."""
    calls = []

    async def fake_scan(cfg, **kwargs):
        calls.append((cfg, kwargs))
        records = [
            AuditRecord(cfg.start_url, [make_violation("image-alt"), make_violation("label")]),
            AuditRecord(cfg.start_url + "a", []),
        ]
        return aggregate_results(
            cfg.start_url, records, discovered={cfg.start_url, cfg.start_url + "a"}
        )

    monkeypatch.setattr(cli_module, "start_scan", fake_scan)
    return calls


@pytest.fixture()
def runner(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def test_version_option(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "wcag_scout" in result.output


def test_audit_writes_html_report(runner, tmp_path, scan_calls):
    result = runner.invoke(cli, ["audit", "site.test", "--delay", "0"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "wcag-report.html").exists()
    assert "Pages audited: 2, violations: 2, average per page: 1.0" in result.output

    cfg, kwargs = scan_calls[0]
    assert cfg.start_url == "https://site.test/"
    assert cfg.politeness_delay == 0
    assert kwargs == {}


def test_audit_json_report(runner, tmp_path, scan_calls):
    out = tmp_path / "out" / "report.json"
    result = runner.invoke(cli, ["audit", "https://site.test", "--json", str(out), "--pretty"])
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["summary"]["total_pages"] == 2
    assert data["pages"][0]["url"] == "https://site.test/"


def test_audit_url_from_environment(runner, scan_calls):
    result = runner.invoke(cli, ["audit"], env={"SITE_URL": "env.test"})
    assert result.exit_code == 0, result.output
    assert scan_calls[0][0].start_url == "https://env.test/"


def test_audit_default_url(runner, scan_calls):
    result = runner.invoke(cli, ["audit"])
    assert result.exit_code == 0, result.output
    assert scan_calls[0][0].start_url == "https://example.com/"


def test_audit_url_from_config_file(runner, tmp_path, scan_calls):
    cfg_file = tmp_path / "wcag.yaml"
    cfg_file.write_text("start_url: config.test\nmax_depth: 2\n", encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(cfg_file), "audit", "--max-depth", "4"])
    assert result.exit_code == 0, result.output
    cfg = scan_calls[0][0]
    assert cfg.start_url == "https://config.test/"
    assert cfg.max_depth == 4


@pytest.mark.parametrize("bad_url", ["   ", "https://", "http://a.com:99999"])
def test_audit_invalid_url_exits_with_1(runner, scan_calls, bad_url):
    result = runner.invoke(cli, ["audit", bad_url])
    assert result.exit_code == 1
    assert "Invalid URL" in result.output
    assert scan_calls == []


@pytest.mark.parametrize("command", ["audit", "discover", "config"])
def test_invalid_url_usage_names_the_command(runner, scan_calls, command):
    result = runner.invoke(cli, [command, "https://"])
    assert result.exit_code == 1
    assert f"Usage: cli {command} https://site.com" in result.output
    assert scan_calls == []


def test_fail_on_violations_exit_code(runner, scan_calls):
    result = runner.invoke(cli, ["audit", "site.test", "--fail-on-violations"])
    assert result.exit_code == 2


def test_audit_fatal_error_exits_with_1(runner, monkeypatch):
    async def broken(cfg, **kwargs):
        raise AxeSourceError("cannot download axe.min.js")

    monkeypatch.setattr(cli_module, "start_scan", broken)
    result = runner.invoke(cli, ["audit", "site.test"])
    assert result.exit_code == 1
    assert "cannot download axe.min.js" in result.output


def test_audit_interrupted_by_slow_scan(runner, monkeypatch):
    async def slow(cfg, **kwargs):
        await asyncio.sleep(0.01)
        raise asyncio.TimeoutError()

    monkeypatch.setattr(cli_module, "start_scan", slow)
    result = runner.invoke(cli, ["audit", "site.test"])
    assert result.exit_code == 1
    assert "Audit failed" in result.output


def test_discover_writes_url_list(runner, tmp_path, scan_calls):
    result = runner.invoke(cli, ["discover", "site.test", "-o", "urls.txt"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "urls.txt").read_text(encoding="utf-8").splitlines() == [
        "https://site.test/",
        "https://site.test/a",
    ]
    assert scan_calls[0][1] == {"audit": False}
    assert "Unique URLs found: 2" in result.output


def test_show_config(runner):
    result = runner.invoke(cli, ["config", "site.test"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["start_url"] == "https://site.test/"
    assert data["concurrency"] == 3


def test_show_config_rejects_invalid_file(runner, tmp_path):
    cfg_file = tmp_path / "bad.yaml"
    cfg_file.write_text("concurrency: 0\n", encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Error loading configuration" in result.output
