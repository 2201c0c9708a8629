"""
Pytest configuration for webbundler test suite.

Integration tests run the real wasm-pack toolchain. They are excluded by
default; pass --full to include them. They are skipped when wasm-pack is
not on PATH.
"""

import shutil

import pytest


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--full",
        action="store_true",
        default=False,
        help="Run full test suite including wasm-pack integration tests (slow)",
    )


def pytest_configure(config):
    """Configure pytest based on command-line options."""
    if config.getoption("--full"):
        # Drop the default "not integration" marker expression from pyproject.toml
        markexpr = config.getoption("-m", "")
        if markexpr == "not integration":
            config.option.markexpr = ""


def pytest_collection_modifyitems(config, items):
    """Skip integration tests when wasm-pack is not installed."""
    if shutil.which("wasm-pack") is not None:
        return

    skip_wasm_pack = pytest.mark.skip(reason="wasm-pack not found on PATH")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_wasm_pack)
