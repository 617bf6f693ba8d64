"""
pytest global configuration

Loads the morphotest plugin and provides per-test isolation of the default
container.
"""

import pytest

from morphotest import ContainerFactory

pytest_plugins = ["morphotest.plugin"]


@pytest.fixture
def fresh_container():
    """A default container created for this test only."""
    ContainerFactory.reset_default_container()
    container = ContainerFactory.get_default_container()
    yield container
    ContainerFactory.reset_default_container()


@pytest.fixture
def fixture_tree(tmp_path):
    """A fixture directory with one nested text file."""
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "a.txt").write_bytes(b"alpha\n")
    return tmp_path
