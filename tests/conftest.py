"""Pytest configuration and fixtures for form-validate tests."""

import logging

import pytest

from form_validate.rules import RuleRegistry, build_default_registry


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even after setup_logging() turned propagation off on the package root.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("form_validate"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


@pytest.fixture
def registry() -> RuleRegistry:
    """Return a fresh registry with the built-in rules."""
    return build_default_registry()
