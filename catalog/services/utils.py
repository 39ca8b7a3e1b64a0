import random

from django.conf import settings

IMAGE_SIZES = {
    "poster": {"SMALL": "w185", "MEDIUM": "w342", "LARGE": "w500", "XLARGE": "w780"},
    "backdrop": {"SMALL": "w780", "MEDIUM": "w1280", "LARGE": "original"},
}

QUICK_NAV_RANGES = [
    ("1-10", 1, 10),
    ("11-25", 11, 25),
    ("26-50", 26, 50),
    ("51-100", 51, 100),
    ("101-200", 101, 200),
    ("201-300", 201, 300),
    ("301-400", 301, 400),
    ("401-500", 401, 500),
]


def build_image_url(path: str | None, size: str = "MEDIUM", kind: str = "poster") -> str | None:
    """Собирает полный url для постера или фона (backdrop) по относительному path"""
    if not path:
        return None
    sizes = IMAGE_SIZES[kind]
    image_size = sizes.get(size, sizes["MEDIUM"])
    return f"{settings.TMDB_IMAGE_BASE_URL}/{image_size}{path}"


def format_nums(value: int | None) -> str:
    """Переводит целое число в строку формата 333,000,000"""
    if not value:
        return "-"
    return f"{int(value):,}"


def format_rating(rating: float | None) -> str:
    """Оценка с одним знаком после запятой: 7.25 -> '7.2'"""
    return f"{float(rating or 0):.1f}"


def rating_color(rating: float | None) -> str:
    """Цвет бейджа оценки: high (>= 8), medium (>= 6), low"""
    rating = float(rating or 0)
    if rating >= 8:
        return "high"
    if rating >= 6:
        return "medium"
    return "low"


def extract_year(release_date: str | None) -> str:
    """Получает дату релиза и возвращает год выхода"""
    return release_date[:4] if release_date else "Unknown"


def truncate_text(text: str | None, max_length: int) -> str:
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def format_duration(minutes: int | None) -> str:
    """Переводит минуты в строку вида '2h 5m' или '45m'"""
    if not minutes:
        return "—"
    hours, rest = divmod(int(minutes), 60)
    if hours == 0:
        return f"{rest}m"
    return f"{hours}h {rest}m"


def pick_featured(items, rng=random):
    """Случайный элемент для баннера на главной"""
    if not items:
        return None
    return items[rng.randrange(len(items))]


def quick_nav_ranges(total_pages: int) -> list[dict]:
    """Быстрые переходы по диапазонам страниц, которые помещаются в total_pages"""
    return [
        {"label": label, "start": start, "end": end}
        for label, start, end in QUICK_NAV_RANGES
        if end <= total_pages
    ]
