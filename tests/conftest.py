"""Shared test fixtures for ts-expect-error tests."""

import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Empty working directory and home, no TS_EXPECT_ERROR_* variables."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("TS_EXPECT_ERROR_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(work)
    return work


DEMO_SOURCE = """\
interface Point {
  x: number;
  y: number;
}

function computeDistance(_point: Point) { /*...*/ }

const obj = { x: 1, y: 2, z: 3 };
computeDistance(obj); // OK

//@ts-expect-error: Object literal may only specify known properties, and
// 'z' does not exist in type 'Point'. (2353)
computeDistance({ x: 1, y: 2, z: 3 });

computeDistance({x: 1, y: 2}); // OK
"""


@pytest.fixture
def demo_source() -> str:
    return DEMO_SOURCE


@pytest.fixture
def demo_file(tmp_path) -> Path:
    path = tmp_path / "demo-success.ts"
    path.write_text(DEMO_SOURCE, encoding="utf-8")
    return path
