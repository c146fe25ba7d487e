"""Shared test fixtures for struct-diff."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from struct_diff.core.differ import Differ

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def differ() -> Differ:
    """A Differ with default settings."""
    return Differ()


@pytest.fixture
def sample_documents(tmp_path: Path) -> tuple[Path, Path]:
    """Create two JSON documents with known differences.

    Expected:  {"name": "x", "tags": ["a"], "port": 80}
    Actual:    {"name": "y", "tags": ["a", "b"], "port": 80}
    """
    expected = tmp_path / "expected.json"
    actual = tmp_path / "actual.json"
    expected.write_text(json.dumps({"name": "x", "tags": ["a"], "port": 80}))
    actual.write_text(json.dumps({"name": "y", "tags": ["a", "b"], "port": 80}))
    return expected, actual


@pytest.fixture
def identical_documents(tmp_path: Path) -> tuple[Path, Path]:
    """Create two JSON documents with the same content."""
    expected = tmp_path / "expected.json"
    actual = tmp_path / "actual.json"
    content = json.dumps({"id": 1, "items": [1, 2, 3]})
    expected.write_text(content)
    actual.write_text(content)
    return expected, actual


@pytest.fixture
def toml_documents(tmp_path: Path) -> tuple[Path, Path]:
    """Create two TOML documents differing in one nested key."""
    expected = tmp_path / "expected.toml"
    actual = tmp_path / "actual.toml"
    expected.write_text('[server]\nhost = "localhost"\nport = 8080\n')
    actual.write_text('[server]\nhost = "localhost"\nport = 9090\n')
    return expected, actual
