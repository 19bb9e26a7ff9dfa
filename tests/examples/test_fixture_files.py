#!/usr/bin/env python3
"""
Parametrized tests over every .ts fixture in tests/examples/.
Each file must extract cleanly and serialize the same way on every run.
"""

import pytest
from pathlib import Path

from tsshape.ir.serialization import serialize_shape


def get_all_fixture_files():
    """Get all TypeScript fixtures for parameterized testing"""
    return sorted(Path(__file__).parent.glob("*.ts"))


class TestFixtureFiles:
    """Whole-file extraction of the fixture sources"""

    @pytest.mark.parametrize("fixture_file", get_all_fixture_files(), ids=lambda f: f.stem)
    def test_extraction(self, driver, fixture_file):
        result = driver.extract_file(fixture_file)
        assert result.success, "\n\n".join(result.get_errors())
        assert result.shapes, f"{fixture_file.name} should declare at least one shape"

        # Every form of every name is built
        for name in result.names:
            assert len(result.shapes_named(name)) == 3, f"{name} should be declared three ways"

    @pytest.mark.parametrize("fixture_file", get_all_fixture_files(), ids=lambda f: f.stem)
    def test_serialization_is_stable(self, driver, fixture_file):
        first = [serialize_shape(s) for s in driver.extract_file(fixture_file).shapes]
        second = [serialize_shape(s) for s in driver.extract_file(fixture_file).shapes]
        assert first == second
