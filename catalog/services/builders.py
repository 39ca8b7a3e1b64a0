from catalog.media import CatalogItem
from catalog.services.utils import build_image_url, extract_year, format_rating, rating_color, truncate_text

BANNER_OVERVIEW_LENGTH = 200


def build_media_card(item: CatalogItem, watchlist=None) -> dict:
    """Возвращает единый формат карточки фильма/сериала для сеток, каруселей и баннера"""
    return {
        **item.to_dict(),
        "poster_url": build_image_url(item.poster_path),
        "backdrop_url": build_image_url(item.backdrop_path, "MEDIUM", "backdrop"),
        "year": extract_year(item.release_date),
        "rating": format_rating(item.vote_average),
        "rating_color": rating_color(item.vote_average),
        "in_watchlist": bool(watchlist and watchlist.contains(item.media_type, item.id)),
    }


def build_featured_banner(item: CatalogItem | None, watchlist=None) -> dict | None:
    """Карточка для баннера главной: фон в большом размере и укороченное описание"""
    if item is None:
        return None
    return {
        **build_media_card(item, watchlist),
        "backdrop_url": build_image_url(item.backdrop_path, "LARGE", "backdrop"),
        "overview_short": truncate_text(item.overview, BANNER_OVERVIEW_LENGTH),
    }


def build_media_cards(items, watchlist=None) -> list[dict]:
    if not items:
        return []
    return [build_media_card(item, watchlist) for item in items]


def build_media_page(media_page, watchlist=None, **extra) -> dict:
    """Ответ для постраничной сетки: карточки + номер страницы + всего страниц"""
    return {
        "items": build_media_cards(media_page.items, watchlist),
        "page": media_page.page,
        "total_pages": media_page.total_pages,
        **extra,
    }
