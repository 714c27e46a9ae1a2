"""Tests for CLI integration (subprocess-based)."""

import subprocess
import sys
from pathlib import Path

import pytest

SIM_ROOT = Path(__file__).parent.parent
CLI_PATH = SIM_ROOT / "cli.py"
SCENARIO_PATH = SIM_ROOT / "data" / "scenarios" / "two_cities.yaml"


def _run_cli(*args, timeout=30):
    """Run CLI command and return CompletedProcess."""
    cmd = [sys.executable, str(CLI_PATH)] + list(args)
    return subprocess.run(
        cmd, capture_output=True, text=True, timeout=timeout, cwd=str(SIM_ROOT)
    )


@pytest.mark.skipif(not SCENARIO_PATH.exists(), reason="two_cities.yaml not found")
def test_run_exits_0():
    result = _run_cli("run", str(SCENARIO_PATH), "--turns", "3")
    assert result.returncode == 0, f"stderr: {result.stderr}"
    assert "FINAL STOCK" in result.stdout


@pytest.mark.skipif(not SCENARIO_PATH.exists(), reason="two_cities.yaml not found")
def test_run_saves_end_state(tmp_path):
    out = tmp_path / "end.yaml"
    result = _run_cli("run", str(SCENARIO_PATH), "--turns", "2", "--output", str(out))
    assert result.returncode == 0, f"stderr: {result.stderr}"
    assert "turn: 2" in out.read_text()


@pytest.mark.skipif(not SCENARIO_PATH.exists(), reason="two_cities.yaml not found")
def test_stock_shows_materials():
    result = _run_cli("stock", str(SCENARIO_PATH), "--owner", "0")
    assert result.returncode == 0, f"stderr: {result.stderr}"
    assert "Money" in result.stdout
    assert "Ore" in result.stdout


@pytest.mark.skipif(not SCENARIO_PATH.exists(), reason="two_cities.yaml not found")
def test_stock_unknown_owner():
    result = _run_cli("stock", str(SCENARIO_PATH), "--owner", "9")
    assert result.returncode == 1
    assert "No business 9" in result.stderr


def test_missing_scenario():
    result = _run_cli("run", "does_not_exist.yaml")
    assert result.returncode == 1
    assert "Error loading" in result.stderr


def test_generate_writes_yaml(tmp_path):
    out = tmp_path / "world.yaml"
    result = _run_cli("generate", "--seed", "3", "--cities", "3", "--output", str(out))
    assert result.returncode == 0, f"stderr: {result.stderr}"
    assert out.exists()
    assert "City 2" in result.stdout


def test_malformed_scenario_reports_error(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("cities: [1]\n")
    result = _run_cli("stock", str(bad))
    assert result.returncode == 1
    assert "Error loading" in result.stderr
    assert "Traceback" not in result.stderr


def test_negative_turns_rejected():
    result = _run_cli("run", str(SCENARIO_PATH), "--turns", "-3")
    assert result.returncode == 2
    assert "must be at least 0" in result.stderr


def test_negative_cities_rejected():
    result = _run_cli("generate", "--cities", "-1")
    assert result.returncode == 2
    assert "must be at least 0" in result.stderr
