"""
Pytest configuration and shared fixtures for all tsshape tests.

This conftest.py provides session and class-scoped fixtures to speed up tests
by reusing the parser (grammar compilation is the expensive part).
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from tsshape.frontend.parser import Parser
from tsshape.compiler.driver import ExtractionDriver

FIXTURES_DIR = Path(__file__).parent / "examples"


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_parser():
    """
    Session-scoped parser shared across ALL tests.

    - Grammar is compiled once, with Lark native caching
    - Safe to share: the transformer keeps no state between parses
    """
    return Parser()


@pytest.fixture(scope="session")
def session_driver(session_parser):
    """Session-scoped extraction driver reusing the session parser."""
    return ExtractionDriver(parser=session_parser)


# =============================================================================
# Class-scoped fixtures (shared within a test class)
# =============================================================================

@pytest.fixture(scope="class")
def parser(session_parser):
    """Class-scoped parser - returns session parser (stateless, safe to share)."""
    return session_parser


@pytest.fixture(scope="class")
def driver(session_driver):
    """Class-scoped driver - returns session driver (stateless, safe to share)."""
    return session_driver


# =============================================================================
# Fixture files
# =============================================================================

@pytest.fixture(scope="session")
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture(scope="session")
def three_forms_result(session_driver):
    """Extraction of the three-forms fixture (class form has `stringField?`)."""
    return session_driver.extract_file(FIXTURES_DIR / "three_forms.ts")


@pytest.fixture(scope="session")
def aligned_forms_result(session_driver):
    """Extraction of the fixture whose three forms agree on every field."""
    return session_driver.extract_file(FIXTURES_DIR / "aligned_forms.ts")


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
