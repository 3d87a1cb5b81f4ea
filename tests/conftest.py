"""
tests/conftest.py – shared pytest configuration.

Registers the ``--integration`` flag and the ``integration`` marker.
Tests marked ``integration`` are skipped unless the flag is passed.
"""

from __future__ import annotations

import pytest


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="Run integration tests against the live KuCoin API",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as a live-network integration test (use --integration to run)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("--integration"):
        return
    skip_integration = pytest.mark.skip(reason="pass --integration to run against KuCoin")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
