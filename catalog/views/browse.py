import logging

from rest_framework.response import Response

from catalog.media import MediaType
from catalog.serializers import PageQuerySerializer, SearchQuerySerializer
from catalog.services.builders import build_featured_banner, build_media_cards, build_media_page
from catalog.services.utils import pick_featured, quick_nav_ranges
from catalog.views.base import CatalogAPIView

logger = logging.getLogger("metflix.catalog")


class HomeView(CatalogAPIView):
    """Главная: баннер и карусели популярных и топ-рейтинговых фильмов и сериалов"""

    def get(self, request, *args, **kwargs):
        service = self.get_media_service()
        watchlist = self.get_watchlist()

        popular_movies = service.get_popular_movies()
        popular_tv = service.get_popular_tv_shows()
        top_rated_movies = service.get_top_rated_movies()
        top_rated_tv = service.get_top_rated_tv_shows()

        featured = pick_featured(popular_movies)
        logger.debug("Home OK: movies=%s tv=%s", len(popular_movies), len(popular_tv))
        return Response(
            {
                "featured": build_featured_banner(featured, watchlist),
                "rows": [
                    {"key": "popular_movies", "title": "Popular Movies",
                     "items": build_media_cards(popular_movies, watchlist)},
                    {"key": "popular_tv", "title": "Popular TV Shows",
                     "items": build_media_cards(popular_tv, watchlist)},
                    {"key": "top_rated_movies", "title": "Top Rated Movies",
                     "items": build_media_cards(top_rated_movies, watchlist)},
                    {"key": "top_rated_tv", "title": "Top Rated TV Shows",
                     "items": build_media_cards(top_rated_tv, watchlist)},
                ],
            }
        )


class CategoryPageView(CatalogAPIView):
    """Постраничная сетка фильмов или сериалов по подборке (?category=&page=)"""
    media_type = MediaType.MOVIE

    def get(self, request, *args, **kwargs):
        query = PageQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        category = query.validated_data["category"]
        page = query.validated_data["page"]

        media_page = self.get_media_service().get_category_page(self.media_type, category, page)
        logger.debug(
            "Category OK: type=%s category=%s page=%s items=%s",
            self.media_type.value, category, page, len(media_page.items),
        )
        return Response(
            build_media_page(
                media_page,
                self.get_watchlist(),
                media_type=self.media_type.value,
                category=category,
                quick_nav=quick_nav_ranges(media_page.total_pages),
            )
        )


class MoviesView(CategoryPageView):
    media_type = MediaType.MOVIE


class TVShowsView(CategoryPageView):
    media_type = MediaType.TV


class SearchView(CatalogAPIView):
    """Поиск по каталогу: multi - фильмы и сериалы вместе, movie/tv - постранично по одному типу"""

    def get(self, request, *args, **kwargs):
        query = SearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        q = query.validated_data["q"]
        search_type = query.validated_data["type"]
        page = query.validated_data["page"]

        service = self.get_media_service()
        watchlist = self.get_watchlist()

        if not q:
            return Response({"query": q, "type": search_type, "items": [], "page": 1, "total_pages": 0})

        if search_type == "multi":
            items = service.search_media(q)
            return Response(
                {
                    "query": q,
                    "type": search_type,
                    "items": build_media_cards(items, watchlist),
                    "page": 1,
                    "total_pages": 1 if items else 0,
                }
            )

        if search_type == "movie":
            media_page = service.search_movies_paginated(q, page)
        else:
            media_page = service.search_tv_shows_paginated(q, page)
        return Response(build_media_page(media_page, watchlist, query=q, type=search_type))
