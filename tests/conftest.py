"""
Pytest configuration and shared fixtures for yamlstack tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from yamlstack.exceptions import ReadError
from yamlstack.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Restore the silent global logger after each test (the CLI replaces it)."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def sample_base_config() -> dict[str, Any]:
    """
    Provide a base configuration document.

    Covers nested mappings, a list of mappings and scalars of every kind.
    """
    return {
        "server": {
            "host": "0.0.0.0",
            "port": 8080,
            "debug": False,
        },
        "database": {
            "url": "postgres://localhost/app",
            "pool": {"min": 1, "max": 5},
        },
        "workers": [
            {"name": "ingest", "replicas": 1},
            {"name": "export", "replicas": 1},
        ],
        "features": ["search", "export"],
        "timeout": None,
    }


@pytest.fixture
def sample_override_config() -> dict[str, Any]:
    """Provide an override document layered on sample_base_config."""
    return {
        "server": {"port": 9090, "debug": True},
        "database": {"pool": {"max": 20}},
        "workers": [{"replicas": 4}],
        "logging": {"level": "INFO"},
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("test.yaml", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        return path

    return _create


@pytest.fixture
def create_text_file(tmp_test_dir: Path):
    """Factory fixture for writing raw text (malformed or empty YAML)."""

    def _create(filename: str, text: str) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _create


class DictReader:
    """In-memory ConfigurationReader keyed by path identifier."""

    def __init__(self, documents: dict[str, str]) -> None:
        self.documents = documents
        self.calls: list[str] = []

    def read_configuration(self, path: str) -> str:
        self.calls.append(path)
        try:
            return self.documents[path]
        except KeyError as err:
            raise ReadError(f"no such document: {path}") from err


@pytest.fixture
def dict_reader():
    """Factory fixture for an in-memory reader."""

    def _create(documents: dict[str, str]) -> DictReader:
        return DictReader(documents)

    return _create
