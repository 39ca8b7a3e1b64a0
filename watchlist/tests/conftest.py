from unittest.mock import patch

import pytest
from rest_framework.test import APIClient

from catalog.media import CatalogItem
from tests.fakes import make_movie, make_show


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def session():
    """Сессия браузера: обычный словарь"""
    return {}


@pytest.fixture
def movie():
    return CatalogItem.from_tmdb(make_movie(550), "movie")


@pytest.fixture
def show():
    return CatalogItem.from_tmdb(make_show(550), "tv")


@pytest.fixture
def mock_logger():
    """Мок логгера списка"""
    with patch("watchlist.store.logger") as mock_log:
        yield mock_log
