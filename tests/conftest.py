import pytest

from arc_loot import config


@pytest.fixture(autouse=True)
def _reset_settings():
    yield
    config._settings = None
