import pytest

from tests.fakes import FakeTmdb


@pytest.fixture(autouse=True)
def tmdb_settings(settings):
    """Тестовые настройки TMDB: без кэша, без повторов, фиктивный ключ"""
    settings.TMDB_API_KEY = "test-key"
    settings.TMDB_LANGUAGE = "en-US"
    settings.TMDB_RETRIES = 1
    settings.TMDB_TIMEOUT = 1
    settings.TMDB_CACHE_ENABLED = False
    settings.CATALOG_WINDOW_EXTEND_FOR_OFFSET = False
    settings.CACHES = {"default": {"BACKEND": "django.core.cache.backends.dummy.DummyCache"}}
    return settings


@pytest.fixture
def fake_tmdb():
    """Фейковый TMDB: 1000 популярных фильмов/сериалов, id элемента = позиция + 1"""
    return FakeTmdb()
