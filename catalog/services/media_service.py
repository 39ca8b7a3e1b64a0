import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import wraps
from typing import List

from django.conf import settings

from catalog.media import CatalogItem, MediaType, items_from_response
from services.pagination import PageOutOfRange, fetch_window
from services.tmdb import CatalogFetchError, Tmdb

logger = logging.getLogger("metflix.catalog")


class UnknownCategory(ValueError):
    """Запрошена неизвестная подборка (category) для фильмов или сериалов"""


@dataclass
class MediaPage:
    """Страница выдачи для приложения"""
    items: List[CatalogItem] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0


def fetch_failure(message: str):
    """Сводит CatalogFetchError операции к одному сообщению 'Failed to fetch ...'"""

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except CatalogFetchError as e:
                logger.error("%s: %s", message, e)
                raise CatalogFetchError(message, path=e.path, reason=e.reason) from e

        return wrapper

    return decorator


class MediaService:
    """Операции каталога поверх TMDB: подборки, постраничные окна, поиск, детали"""

    MOVIE_CATEGORIES = ("popular", "top_rated", "now_playing", "upcoming")
    TV_CATEGORIES = ("popular", "top_rated", "on_the_air", "airing_today")

    def __init__(self, tmdb: Tmdb | None = None) -> None:
        self.tmdb = tmdb or Tmdb()

    def _direct_page(self, fetch, media_type, page: int) -> MediaPage:
        """Страница TMDB как есть: 20 элементов, total_pages не больше лимита TMDB"""
        if page > settings.TMDB_MAX_PAGES:
            raise PageOutOfRange(f"Page {page} is out of range: at most {settings.TMDB_MAX_PAGES} pages are available")
        response = fetch(page)
        return MediaPage(
            items=items_from_response(response, media_type),
            page=page,
            total_pages=min(int(response.get("total_pages") or 0), settings.TMDB_MAX_PAGES),
        )

    def _window_page(self, fetch, media_type, page: int) -> MediaPage:
        """Страница приложения из CATALOG_WINDOW_SIZE элементов, собранная из страниц TMDB"""
        window = fetch_window(
            fetch,
            page,
            target_page_size=settings.CATALOG_WINDOW_SIZE,
            upstream_page_size=settings.TMDB_PAGE_SIZE,
            max_total_pages=settings.TMDB_MAX_PAGES,
            extend_for_offset=settings.CATALOG_WINDOW_EXTEND_FOR_OFFSET,
        )
        return MediaPage(
            items=[CatalogItem.from_tmdb(raw, media_type) for raw in window.items if raw.get("id")],
            page=page,
            total_pages=window.total_pages,
        )

    # Подборки для главной страницы

    @fetch_failure("Failed to fetch popular movies")
    def get_popular_movies(self) -> List[CatalogItem]:
        return items_from_response(self.tmdb.get_popular_movies(), MediaType.MOVIE)

    @fetch_failure("Failed to fetch popular TV shows")
    def get_popular_tv_shows(self) -> List[CatalogItem]:
        return items_from_response(self.tmdb.get_popular_tv(), MediaType.TV)

    @fetch_failure("Failed to fetch top rated movies")
    def get_top_rated_movies(self) -> List[CatalogItem]:
        return items_from_response(self.tmdb.get_top_rated_movies(), MediaType.MOVIE)

    @fetch_failure("Failed to fetch top rated TV shows")
    def get_top_rated_tv_shows(self) -> List[CatalogItem]:
        return items_from_response(self.tmdb.get_top_rated_tv(), MediaType.TV)

    # Постраничный просмотр

    @fetch_failure("Failed to fetch paginated movies")
    def get_popular_movies_paginated(self, page: int = 1) -> MediaPage:
        return self._window_page(self.tmdb.get_popular_movies, MediaType.MOVIE, page)

    @fetch_failure("Failed to fetch paginated TV shows")
    def get_popular_tv_shows_paginated(self, page: int = 1) -> MediaPage:
        return self._window_page(self.tmdb.get_popular_tv, MediaType.TV, page)

    @fetch_failure("Failed to fetch paginated top rated movies")
    def get_top_rated_movies_paginated(self, page: int = 1) -> MediaPage:
        return self._direct_page(self.tmdb.get_top_rated_movies, MediaType.MOVIE, page)

    @fetch_failure("Failed to fetch paginated now playing movies")
    def get_now_playing_movies_paginated(self, page: int = 1) -> MediaPage:
        return self._direct_page(self.tmdb.get_now_playing_movies, MediaType.MOVIE, page)

    @fetch_failure("Failed to fetch paginated upcoming movies")
    def get_upcoming_movies_paginated(self, page: int = 1) -> MediaPage:
        return self._direct_page(self.tmdb.get_upcoming_movies, MediaType.MOVIE, page)

    @fetch_failure("Failed to fetch paginated top rated TV shows")
    def get_top_rated_tv_shows_paginated(self, page: int = 1) -> MediaPage:
        return self._direct_page(self.tmdb.get_top_rated_tv, MediaType.TV, page)

    @fetch_failure("Failed to fetch paginated on the air TV shows")
    def get_on_the_air_tv_shows_paginated(self, page: int = 1) -> MediaPage:
        return self._direct_page(self.tmdb.get_on_the_air_tv, MediaType.TV, page)

    @fetch_failure("Failed to fetch paginated airing today TV shows")
    def get_airing_today_tv_shows_paginated(self, page: int = 1) -> MediaPage:
        return self._direct_page(self.tmdb.get_airing_today_tv, MediaType.TV, page)

    def get_category_page(self, media_type, category: str, page: int = 1) -> MediaPage:
        """Выбирает операцию по названию подборки из MOVIE_CATEGORIES или TV_CATEGORIES"""
        media_type = MediaType(media_type)
        if media_type is MediaType.MOVIE:
            categories, suffix = self.MOVIE_CATEGORIES, "movies"
        else:
            categories, suffix = self.TV_CATEGORIES, "tv_shows"
        if category not in categories:
            raise UnknownCategory(f"Unknown {media_type.value} category: {category!r}")
        return getattr(self, f"get_{category}_{suffix}_paginated")(page)

    # Поиск

    @fetch_failure("Failed to search media")
    def search_media(self, query: str) -> List[CatalogItem]:
        """Ищет одновременно фильмы и сериалы: сначала фильмы, затем сериалы"""
        if not query or not query.strip():
            return []

        with ThreadPoolExecutor(max_workers=2) as ex:
            fm = ex.submit(self.tmdb.search_movie, query)
            ft = ex.submit(self.tmdb.search_tv, query)
            movies = fm.result()
            shows = ft.result()

        return items_from_response(movies, MediaType.MOVIE) + items_from_response(shows, MediaType.TV)

    @fetch_failure("Failed to search movies")
    def search_movies_paginated(self, query: str, page: int = 1) -> MediaPage:
        return self._direct_page(lambda p: self.tmdb.search_movie(query, p), MediaType.MOVIE, page)

    @fetch_failure("Failed to search TV shows")
    def search_tv_shows_paginated(self, query: str, page: int = 1) -> MediaPage:
        return self._direct_page(lambda p: self.tmdb.search_tv(query, p), MediaType.TV, page)

    # Детали

    @fetch_failure("Failed to fetch movie details")
    def get_movie_details(self, movie_id: int) -> dict:
        return self.tmdb.get_movie_details(movie_id)

    @fetch_failure("Failed to fetch TV show details")
    def get_tv_show_details(self, tv_id: int) -> dict:
        return self.tmdb.get_tv_details(tv_id)

    @fetch_failure("Failed to fetch movie videos")
    def get_movie_videos(self, movie_id: int) -> list:
        return self.tmdb.get_movie_videos(movie_id).get("results") or []

    @fetch_failure("Failed to fetch TV show videos")
    def get_tv_show_videos(self, tv_id: int) -> list:
        return self.tmdb.get_tv_videos(tv_id).get("results") or []

    @fetch_failure("Failed to fetch movie credits")
    def get_movie_credits(self, movie_id: int) -> dict:
        return self.tmdb.get_movie_credits(movie_id)

    @fetch_failure("Failed to fetch TV show credits")
    def get_tv_show_credits(self, tv_id: int) -> dict:
        return self.tmdb.get_tv_credits(tv_id)

    def get_details(self, media_type, media_id: int) -> dict:
        if MediaType(media_type) is MediaType.MOVIE:
            return self.get_movie_details(media_id)
        return self.get_tv_show_details(media_id)

    def get_videos(self, media_type, media_id: int) -> list:
        if MediaType(media_type) is MediaType.MOVIE:
            return self.get_movie_videos(media_id)
        return self.get_tv_show_videos(media_id)

    def get_credits(self, media_type, media_id: int) -> dict:
        if MediaType(media_type) is MediaType.MOVIE:
            return self.get_movie_credits(media_id)
        return self.get_tv_show_credits(media_id)
