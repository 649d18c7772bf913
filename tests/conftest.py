"""
Pytest configuration and fixtures for commerce-validation tests

This module provides shared fixtures for unit and integration tests.
"""
import json
import os
from datetime import date
from pathlib import Path
from typing import Callable

import pytest

from commerce_validation.observability.metrics import REGISTRY


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that exercise a single module"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that run loader, evaluator and CLI together"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# DATE FIXTURES
# =======================

FIXED_TODAY = date(2024, 6, 15)


@pytest.fixture
def fixed_today() -> Callable[[], date]:
    """
    Clock for the date rules pinned to 2024-06-15

    Returns:
        Callable returning the fixed date
    """
    return lambda: FIXED_TODAY


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture
def write_rules(tmp_path) -> Callable[[str], Path]:
    """
    Write YAML rule text to a temporary file

    Returns:
        Function taking YAML text and returning the file path
    """
    def _write(text: str, name: str = "rules.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def write_json(tmp_path) -> Callable[[object, str], Path]:
    """
    Write a JSON document to a temporary file

    Returns:
        Function taking a JSON-serializable object and a file name
    """
    def _write(data: object, name: str = "data.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture(scope="session")
def example_rules_path() -> Path:
    """Path to the example sign-up rules shipped in config/"""
    return Path(__file__).resolve().parent.parent / "config" / "rules.example.yaml"


# =======================
# METRICS FIXTURES
# =======================

@pytest.fixture
def metric_value() -> Callable[..., float]:
    """
    Read a sample from the package metrics registry, 0.0 when unset

    Usage:
        before = metric_value("validation_evaluations_total", outcome="passed")
    """
    def _read(name: str, **labels) -> float:
        return REGISTRY.get_sample_value(name, labels) or 0.0

    return _read


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture
def test_env_vars(monkeypatch):
    """
    Set test environment variables

    This fixture reads config/test.env and applies it through monkeypatch,
    so the variables are restored after each test
    """
    from dotenv import dotenv_values

    env_path = os.path.join(
        os.path.dirname(os.path.dirname(__file__)),
        "config",
        "test.env"
    )

    values = dotenv_values(env_path)
    for name, value in values.items():
        if value is not None:
            monkeypatch.setenv(name, value)
    return values
