import pytest
from rest_framework.test import APIClient

from catalog.services.media_service import MediaService
from tests.fakes import FakeTmdb


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def service(fake_tmdb):
    return MediaService(tmdb=fake_tmdb)


@pytest.fixture
def use_fake_tmdb(monkeypatch, fake_tmdb):
    """Все представления каталога работают с фейковым TMDB"""
    monkeypatch.setattr(
        "catalog.views.base.CatalogAPIView.media_service_class",
        staticmethod(lambda: MediaService(tmdb=fake_tmdb)),
    )
    return fake_tmdb


@pytest.fixture
def broken_tmdb(monkeypatch):
    """TMDB, у которого падает любая страница"""
    broken = FakeTmdb(fail_pages=set(range(1, 501)))
    monkeypatch.setattr(
        "catalog.views.base.CatalogAPIView.media_service_class",
        staticmethod(lambda: MediaService(tmdb=broken)),
    )
    return broken
