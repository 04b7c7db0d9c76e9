# File: tests/conftest.py

import pytest

from mass_timber_designer.catalog import SizeCatalog, load_catalog


@pytest.fixture(scope="session")
def catalog() -> SizeCatalog:
    """The packaged MASSLAM size catalog."""
    return load_catalog()


@pytest.fixture
def empty_catalog() -> SizeCatalog:
    """A catalog that has not been loaded."""
    return SizeCatalog()
