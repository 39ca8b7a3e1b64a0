import pytest

from catalog.media import MediaType
from catalog.services.media_service import MediaService, UnknownCategory
from services.pagination import PageOutOfRange
from services.tmdb import CatalogFetchError
from tests.fakes import FakeTmdb


def test_popular_lists(service):
    """Подборки для главной - первая страница TMDB, тип проставлен"""
    movies = service.get_popular_movies()
    shows = service.get_popular_tv_shows()

    assert len(movies) == 20
    assert all(m.media_type is MediaType.MOVIE for m in movies)
    assert shows[0].title == "Show 1"
    assert all(s.media_type is MediaType.TV for s in shows)


def test_popular_movies_paginated_uses_window(service, fake_tmdb):
    """Популярные фильмы идут окнами по 28 элементов"""
    page = service.get_popular_movies_paginated(2)

    assert [m.id for m in page.items] == list(range(29, 57))
    assert page.page == 2
    assert page.total_pages == 36
    assert sorted(p for name, p in fake_tmdb.calls if name == "movie/popular") == [2, 3]


def test_popular_tv_paginated_boundary(service):
    """Страница 3 сериалов короче 28 элементов при настройках по умолчанию"""
    page = service.get_popular_tv_shows_paginated(3)

    assert len(page.items) == 24


def test_popular_paginated_extend_setting(service, settings):
    """CATALOG_WINDOW_EXTEND_FOR_OFFSET включает исправленную формулу"""
    settings.CATALOG_WINDOW_EXTEND_FOR_OFFSET = True

    assert len(service.get_popular_tv_shows_paginated(3).items) == 28


def test_direct_page_total_pages_capped():
    """Прочие подборки отдаются страницами TMDB, total_pages не больше 500"""
    service = MediaService(tmdb=FakeTmdb(total_results=20 * 1000))
    page = service.get_top_rated_movies_paginated(4)

    assert len(page.items) == 20
    assert page.items[0].id == 61
    assert page.total_pages == 500


def test_direct_page_past_limit_rejected(fake_tmdb):
    """Страницы TMDB после 500-й не запрашиваются"""
    service = MediaService(tmdb=fake_tmdb)

    with pytest.raises(PageOutOfRange):
        service.get_upcoming_movies_paginated(501)
    assert fake_tmdb.calls == []


def test_windowed_total_pages_all_fetchable():
    """Каждая объявленная страница популярных фильмов собирается, даже если TMDB сообщает огромный total_results"""
    service = MediaService(tmdb=FakeTmdb(total_results=10_000_000))
    total_pages = service.get_popular_movies_paginated(1).total_pages

    last = service.get_popular_movies_paginated(total_pages)

    assert total_pages == 358
    assert [m.id for m in last.items] == [9997, 9998, 9999, 10000]
    with pytest.raises(PageOutOfRange):
        service.get_popular_movies_paginated(total_pages + 1)


def test_category_dispatch(service, fake_tmdb):
    """get_category_page выбирает эндпоинт по названию подборки"""
    service.get_category_page("movie", "upcoming", 1)
    service.get_category_page(MediaType.TV, "airing_today", 2)

    assert ("movie/upcoming", 1) in fake_tmdb.calls
    assert ("tv/airing_today", 2) in fake_tmdb.calls


@pytest.mark.parametrize("media_type, category", [("movie", "on_the_air"), ("tv", "upcoming"), ("movie", "x")])
def test_category_unknown(service, media_type, category):
    """Подборка не из списка для данного типа - UnknownCategory"""
    with pytest.raises(UnknownCategory):
        service.get_category_page(media_type, category, 1)


def test_search_media_movies_then_shows(service):
    """Поиск: сначала фильмы, затем сериалы"""
    results = service.search_media("matrix")

    assert len(results) == 40
    assert results[0].media_type is MediaType.MOVIE
    assert results[-1].media_type is MediaType.TV


def test_search_media_blank_query(service, fake_tmdb):
    """Пустой запрос не ходит в TMDB"""
    assert service.search_media("   ") == []
    assert fake_tmdb.calls == []


def test_search_paginated(service, fake_tmdb):
    page = service.search_tv_shows_paginated("office", 2)

    assert page.items[0].id == 21
    assert ("search/tv", 2) in fake_tmdb.calls


def test_failure_collapsed_into_single_signal():
    """Ошибка TMDB превращается в общий сигнал с названием операции"""
    service = MediaService(tmdb=FakeTmdb(fail_pages={3}))

    with pytest.raises(CatalogFetchError, match="Failed to fetch paginated movies"):
        service.get_popular_movies_paginated(2)


def test_details_dispatch_by_type(service, fake_tmdb):
    """Детали, видео и актёры выбираются по типу"""
    assert service.get_details("tv", 9)["name"] == "Show 9"
    assert service.get_details("movie", 9)["title"] == "Movie 9"
    assert len(service.get_videos("movie", 9)) == 4
    assert service.get_credits(MediaType.TV, 9)["crew"][0]["job"] == "Director"
