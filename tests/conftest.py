"""Pytest configuration and shared fixtures for linecut tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from linecut.application.commands import OptimizeCutlistCommand
    from linecut.infrastructure.linear_packing import LinearBinPacker


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests that drive the CLI or HTTP API end to end"
    )


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def default_stock() -> list[float]:
    """Stock lengths offered by default (6400, 5600, 4900)."""
    return [6400.0, 5600.0, 4900.0]


@pytest.fixture
def packer() -> "LinearBinPacker":
    """Create a packer with default configuration."""
    from linecut.infrastructure.linear_packing import LinearBinPacker

    return LinearBinPacker()


@pytest.fixture
def optimize_command() -> "OptimizeCutlistCommand":
    """Create an OptimizeCutlistCommand using the service factory."""
    from linecut.application.factory import get_factory

    return get_factory().create_optimize_command()


@pytest.fixture(autouse=True)
def _reset_service_factory():
    """Give every test a fresh default service factory."""
    from linecut.application.factory import reset_factory

    reset_factory()
    yield
    reset_factory()
