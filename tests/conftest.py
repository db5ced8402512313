"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Iterator

import pytest

from structkit import reset_config
from structkit.codec.registry import TYPE_REGISTRY


@pytest.fixture(autouse=True)
def clean_config() -> Iterator[None]:
    """Restore the default configuration after each test."""
    yield
    reset_config()


@pytest.fixture
def clean_registry() -> Iterator[dict]:
    """Snapshot the type registry and restore it after the test."""
    snapshot = dict(TYPE_REGISTRY)
    yield TYPE_REGISTRY
    TYPE_REGISTRY.clear()
    TYPE_REGISTRY.update(snapshot)


@pytest.fixture
def sample_buffer() -> bytes:
    """Sample bytes used by the reading tests."""
    return bytes([0x03, 0x01, 0x20, 0xFF, 0x00])
