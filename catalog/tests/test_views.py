from django.urls import reverse

from catalog.services.media_service import MediaService
from services.tmdb import CatalogFetchError
from tests.fakes import FakeTmdb


class TestCatalogViews:
    def test_home(self, api_client, use_fake_tmdb):
        """GET /api/catalog/home/ - баннер и четыре карусели"""
        response = api_client.get(reverse("catalog:home"))

        assert response.status_code == 200
        data = response.json()
        assert [row["key"] for row in data["rows"]] == [
            "popular_movies", "popular_tv", "top_rated_movies", "top_rated_tv",
        ]
        assert data["featured"]["media_type"] == "movie"
        assert data["featured"]["overview_short"] == "overview"
        assert len(data["rows"][1]["items"]) == 20

    def test_movies_default_popular_window(self, api_client, use_fake_tmdb):
        """GET /api/catalog/movies/?page=2 - окно из 28 популярных фильмов"""
        response = api_client.get(reverse("catalog:movies"), {"page": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["category"] == "popular"
        assert [item["id"] for item in data["items"]] == list(range(29, 57))
        assert data["total_pages"] == 36
        assert [r["label"] for r in data["quick_nav"]] == ["1-10", "11-25"]

    def test_tv_category(self, api_client, use_fake_tmdb):
        """GET /api/catalog/tv/?category=on_the_air - страница TMDB как есть"""
        response = api_client.get(reverse("catalog:tv_shows"), {"category": "on_the_air"})

        assert response.status_code == 200
        assert len(response.json()["items"]) == 20
        assert ("tv/on_the_air", 1) in use_fake_tmdb.calls

    def test_unknown_category(self, api_client, use_fake_tmdb):
        """Неизвестная подборка - 400"""
        response = api_client.get(reverse("catalog:movies"), {"category": "airing_today"})

        assert response.status_code == 400

    def test_bad_page(self, api_client, use_fake_tmdb):
        """Номер страницы не число или меньше 1 - 400"""
        assert api_client.get(reverse("catalog:movies"), {"page": "abc"}).status_code == 400
        assert api_client.get(reverse("catalog:movies"), {"page": 0}).status_code == 400

    def test_quick_nav_and_last_page_within_tmdb_limit(self, api_client, monkeypatch):
        """Большой каталог: 358 страниц, последняя отдается, следующая - 400 без запросов в TMDB"""
        big = FakeTmdb(total_results=10_000_000)
        monkeypatch.setattr(
            "catalog.views.base.CatalogAPIView.media_service_class",
            staticmethod(lambda: MediaService(tmdb=big)),
        )
        url = reverse("catalog:movies")

        first = api_client.get(url).json()
        assert first["total_pages"] == 358
        assert all(r["end"] <= 358 for r in first["quick_nav"])

        last = api_client.get(url, {"page": 358})
        assert last.status_code == 200
        assert len(last.json()["items"]) == 4

        big.calls.clear()
        assert api_client.get(url, {"page": 359}).status_code == 400
        assert big.calls == []

    def test_upstream_failure(self, api_client, broken_tmdb):
        """Сбой TMDB - 502 с общим сообщением, без частичных данных"""
        response = api_client.get(reverse("catalog:movies"), {"page": 2})

        assert response.status_code == 502
        assert response.json() == {"detail": "Failed to fetch data from the server."}

    def test_search_multi(self, api_client, use_fake_tmdb):
        """GET /api/catalog/search/?q= - фильмы и сериалы вместе"""
        response = api_client.get(reverse("catalog:search"), {"q": "star"})

        assert response.status_code == 200
        types = {item["media_type"] for item in response.json()["items"]}
        assert types == {"movie", "tv"}

    def test_search_by_type(self, api_client, use_fake_tmdb):
        response = api_client.get(reverse("catalog:search"), {"q": "star", "type": "movie", "page": 3})

        data = response.json()
        assert data["page"] == 3
        assert data["items"][0]["id"] == 41
        assert data["type"] == "movie"

    def test_search_empty_query(self, api_client, use_fake_tmdb):
        """Пустой запрос - пустая выдача без обращения к TMDB"""
        response = api_client.get(reverse("catalog:search"), {"q": ""})

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert use_fake_tmdb.calls == []

    def test_media_detail(self, api_client, use_fake_tmdb):
        """GET /api/catalog/movie/5/ - детали, актёры, трейлеры"""
        response = api_client.get(reverse("catalog:media_detail", kwargs={"media_type": "movie", "media_id": 5}))

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Movie 5"
        assert len(data["trailers"]) == 2

    def test_media_detail_unknown_type(self, api_client, use_fake_tmdb):
        response = api_client.get(reverse("catalog:media_detail", kwargs={"media_type": "person", "media_id": 5}))

        assert response.status_code == 404

    def test_media_detail_failure(self, api_client, monkeypatch, use_fake_tmdb):
        """Сбой при загрузке деталей - 502"""
        def fail(*args, **kwargs):
            raise CatalogFetchError("HTTP error! status: 404", path="/movie/5", reason="status")

        monkeypatch.setattr(use_fake_tmdb, "get_movie_details", fail)
        response = api_client.get(reverse("catalog:media_detail", kwargs={"media_type": "movie", "media_id": 5}))

        assert response.status_code == 502
