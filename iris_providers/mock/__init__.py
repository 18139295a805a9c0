"""Fixture-backed mock provider for offline tests and examples."""

from .client import MockProvider, load_fixture_catalog

__all__ = ["MockProvider", "load_fixture_catalog"]
