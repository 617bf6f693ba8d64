"""
Fixture files used by the test suite.

``FIXTURES_DIR`` is also configured as ``morphotest_fixture_base_path`` in
pyproject.toml.
"""

from pathlib import Path

FIXTURES_DIR = Path(__file__).parent / "files"

__all__ = ["FIXTURES_DIR"]
