import json
import logging
from pathlib import Path
from unittest import mock

import pytest
from click.testing import CliRunner
from mfetch import cli

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def fake_dmi_table(dmi_type: int) -> str:
    name = "dmidecode_type16.out" if dmi_type == 16 else "dmidecode_type17_multisocket.out"
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def cache_home(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
    yield tmp_path
    logger = logging.getLogger("mfetch")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def runner():
    return CliRunner()


@mock.patch("mfetch.util.system.is_root", return_value=False)
def test_requires_root(is_root, runner):
    result = runner.invoke(cli.main, ["--no-color"])
    assert result.exit_code == 1
    assert "This script requires root privileges." in result.output


@mock.patch("mfetch.util.system.read_dmi_table", side_effect=fake_dmi_table)
@mock.patch("mfetch.util.system.dmidecode_available", return_value=True)
@mock.patch("mfetch.util.system.is_root", return_value=True)
def test_report(is_root, dmidecode_available, read_dmi_table, runner):
    result = runner.invoke(
        cli.main, ["--no-color", "--meminfo", str(FIXTURES / "meminfo.out")]
    )
    assert result.exit_code == 0, result.output
    assert "Max. RAM size: 2 TB (16 slots)" in result.output
    assert "Memory type: DDR4" in result.output
    assert "Speed: Mixed" in result.output
    assert "Total RAM: 16.00 GB" in result.output
    assert "Total swap: 8.00 GB" in result.output
    assert "CPU 0 / Channel A (module #2)" in result.output
    assert "CPU 1 / Bank 3" in result.output


@mock.patch("mfetch.util.system.read_dmi_table", side_effect=fake_dmi_table)
@mock.patch("mfetch.util.system.dmidecode_available", return_value=True)
@mock.patch("mfetch.util.system.is_root", return_value=True)
def test_report_json(is_root, dmidecode_available, read_dmi_table, runner):
    result = runner.invoke(
        cli.main, ["--json", "--meminfo", str(FIXTURES / "meminfo.out")]
    )
    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    assert report["dmi"]["array"]["supported_type"] == "DDR4"
    assert len(report["dmi"]["modules"]) == 3
    assert report["usage"]["ram"]["percentage"] == 50.0
    assert report["usage"]["swap"]["used_gb"] == 2.0


@mock.patch("mfetch.util.system.dmidecode_available", return_value=False)
def test_report_without_root_or_dmidecode(dmidecode_available, runner, tmp_path):
    result = runner.invoke(
        cli.main,
        ["--no-color", "--no-root-check", "--meminfo", str(tmp_path / "missing")],
    )
    assert result.exit_code == 0, result.output
    assert "The physical memory information is not available." in result.output
    assert "The command 'dmidecode' is not available." in result.output
    assert "ERROR: Can't read /proc/meminfo." in result.output


@mock.patch("mfetch.util.system.read_dmi_table", side_effect=fake_dmi_table)
@mock.patch("mfetch.util.system.dmidecode_available", return_value=True)
@mock.patch("mfetch.util.system.is_root", return_value=True)
def test_bar_width_option(is_root, dmidecode_available, read_dmi_table, runner):
    result = runner.invoke(
        cli.main,
        ["--no-color", "--bar-width", "10", "--meminfo", str(FIXTURES / "meminfo.out")],
    )
    assert result.exit_code == 0, result.output
    assert "Usage: [#####-----] 50.00%" in result.output


@mock.patch("mfetch.util.system.dmidecode_available", return_value=False)
def test_writes_logfile(dmidecode_available, runner, cache_home, tmp_path):
    runner.invoke(cli.main, ["--no-root-check", "--meminfo", str(tmp_path / "missing")])
    assert (cache_home / "mfetch" / "mfetch.log").exists()


@mock.patch("mfetch.util.system.dmidecode_available", return_value=False)
def test_report_with_undecodable_meminfo(dmidecode_available, runner, tmp_path):
    path = tmp_path / "meminfo"
    path.write_bytes(b"MemTotal: 1024 kB\n\xff\xfe garbage\n")
    result = runner.invoke(cli.main, ["--no-color", "--no-root-check", "--meminfo", str(path)])
    assert result.exit_code == 0, result.output
    assert "ERROR: Can't read /proc/meminfo." in result.output
