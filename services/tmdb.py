import hashlib
import json
import logging
import time
from json import JSONDecodeError

import requests
from django.conf import settings
from django.core.cache import cache

from services.cache_ttl import TMDB_TTL

logger = logging.getLogger("metflix.catalog")

RETRYABLE_STATUSES = (429, 500, 502, 503, 504)


class CatalogFetchError(Exception):
    """Единый сигнал ошибки загрузки данных из каталога (сеть, HTTP-статус, битый JSON)"""

    def __init__(self, message: str, path: str | None = None, reason: str | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.reason = reason


class Tmdb:
    """Класс для работы с TMDB API"""

    def __init__(self, api_key: str | None = None, language: str | None = None) -> None:
        self._base_url: str = settings.TMDB_BASE_URL
        self._base_params: dict = {
            "api_key": api_key if api_key is not None else settings.TMDB_API_KEY,
            "language": language or settings.TMDB_LANGUAGE,
        }

    @staticmethod
    def _make_cache_key(prefix: str, path: str, params: dict) -> str:
        """
        Создает уникальный безопасный ключ для кэша:
        порядок ключей в params не влияет на результат, длина ключа ограничена 200 символами
        """
        raw = json.dumps(params, sort_keys=True, ensure_ascii=False).encode("utf-8")
        digest = hashlib.md5(raw).hexdigest()
        return f"tmdb_{prefix}:{path}:{digest}"[:200]

    def _get(self, path: str, params: dict | None = None, ttl_key: str = "popular", retries=None, timeout=None) -> dict:
        """
        Внутренний метод для GET запросов.
        Любая ошибка (таймаут, обрыв соединения, HTTP-статус, невалидный JSON) поднимает CatalogFetchError.
        retries=1 - одна попытка без повторов; при retries > 1 включается backoff 1s → 2s → 4s
        """
        url = f"{self._base_url}{path}"
        params = {k: v for k, v in {**self._base_params, **(params or {})}.items() if v is not None}
        retries = retries or settings.TMDB_RETRIES
        timeout = timeout or settings.TMDB_TIMEOUT

        cache_key = None
        if settings.TMDB_CACHE_ENABLED:
            cache_key = self._make_cache_key("tmdb", path, params)
            cached = cache.get(cache_key)
            if cached is not None:
                return cached

        for attempt in range(1, retries + 1):
            try:
                response = requests.get(url, params=params, timeout=timeout)
                response.raise_for_status()
                data = response.json()
            except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
                if attempt < retries:
                    time.sleep(2 ** (attempt - 1))
                    continue
                logger.warning("TMDB FAIL: path=%s network error: %s", path, e)
                raise CatalogFetchError("Network error", path=path, reason="network") from e
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                if status in RETRYABLE_STATUSES and attempt < retries:
                    time.sleep(2 ** (attempt - 1))
                    continue
                logger.warning("TMDB FAIL: path=%s status=%s", path, status)
                raise CatalogFetchError(f"HTTP error! status: {status}", path=path, reason="status") from e
            except JSONDecodeError as e:
                # requests.exceptions.JSONDecodeError - наследник и JSONDecodeError, и RequestException
                logger.warning("TMDB FAIL: path=%s malformed body", path)
                raise CatalogFetchError("Malformed response body", path=path, reason="decode") from e
            except requests.exceptions.RequestException as e:
                logger.warning("TMDB FAIL: path=%s request error: %s", path, e)
                raise CatalogFetchError("Request error", path=path, reason="network") from e

            if cache_key:
                cache.set(cache_key, data, TMDB_TTL.get(ttl_key, 60 * 60 * 12))
            logger.debug("TMDB OK: path=%s page=%s", path, params.get("page"))
            return data

        raise CatalogFetchError("No attempts made", path=path, reason="network")

    def _get_page(self, path: str, page: int = 1, params: dict | None = None, ttl_key: str = "popular") -> dict:
        """Возвращает одну страницу выдачи TMDB (20 элементов)"""
        return self._get(path, {**(params or {}), "page": page}, ttl_key)

    # Фильмы

    def get_popular_movies(self, page=1):
        """Популярные фильмы"""
        return self._get_page("/movie/popular", page, ttl_key="popular")

    def get_top_rated_movies(self, page=1):
        """Топ-рейтинговые фильмы"""
        return self._get_page("/movie/top_rated", page, ttl_key="top_rated")

    def get_now_playing_movies(self, page=1):
        """Фильмы, которые сейчас в кино"""
        return self._get_page("/movie/now_playing", page, ttl_key="trending")

    def get_upcoming_movies(self, page=1):
        """Фильмы, которые скоро выйдут в прокат"""
        return self._get_page("/movie/upcoming", page, ttl_key="trending")

    def search_movie(self, query, page=1):
        """Поиск фильмов по строке"""
        return self._get("/search/movie", {"query": query, "page": page}, "search")

    def get_movie_details(self, movie_id):
        """Подробная информация о фильме"""
        return self._get(f"/movie/{movie_id}", {}, "detail")

    def get_movie_videos(self, movie_id):
        """Видео (трейлеры, тизеры) фильма"""
        return self._get(f"/movie/{movie_id}/videos", {}, "videos")

    def get_movie_credits(self, movie_id):
        """Актёры (cast) и команда (crew) фильма"""
        return self._get(f"/movie/{movie_id}/credits", {}, "credits")

    # Сериалы

    def get_popular_tv(self, page=1):
        """Популярные сериалы"""
        return self._get_page("/tv/popular", page, ttl_key="popular")

    def get_top_rated_tv(self, page=1):
        """Топ-рейтинговые сериалы"""
        return self._get_page("/tv/top_rated", page, ttl_key="top_rated")

    def get_on_the_air_tv(self, page=1):
        """Сериалы, которые сейчас выходят в эфир"""
        return self._get_page("/tv/on_the_air", page, ttl_key="trending")

    def get_airing_today_tv(self, page=1):
        """Сериалы с эпизодами в эфире сегодня"""
        return self._get_page("/tv/airing_today", page, ttl_key="trending")

    def search_tv(self, query, page=1):
        """Поиск сериалов по строке"""
        return self._get("/search/tv", {"query": query, "page": page}, "search")

    def get_tv_details(self, tv_id):
        """Подробная информация о сериале"""
        return self._get(f"/tv/{tv_id}", {}, "detail")

    def get_tv_videos(self, tv_id):
        """Видео сериала"""
        return self._get(f"/tv/{tv_id}/videos", {}, "videos")

    def get_tv_credits(self, tv_id):
        """Актёры и команда сериала"""
        return self._get(f"/tv/{tv_id}/credits", {}, "credits")
