import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger("metflix.catalog")

TARGET_PAGE_SIZE = 28
UPSTREAM_PAGE_SIZE = 20
MAX_TOTAL_PAGES = 500


@dataclass(frozen=True)
class WindowPlan:
    """Какие страницы TMDB нужны для одной страницы приложения и где внутри них начинается окно"""
    start: int
    start_upstream_page: int
    pages_to_fetch: int
    offset: int

    @property
    def upstream_pages(self) -> range:
        return range(self.start_upstream_page, self.start_upstream_page + self.pages_to_fetch)


class PageOutOfRange(ValueError):
    """Страница приложения начинается за последней страницей, которую отдает TMDB"""


@dataclass
class Window:
    """Окно элементов для страницы приложения + общее число страниц приложения"""
    items: list = field(default_factory=list)
    total_pages: int = 0


def _check_positive(name: str, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


def plan_window(
    application_page: int,
    target_page_size: int = TARGET_PAGE_SIZE,
    upstream_page_size: int = UPSTREAM_PAGE_SIZE,
    extend_for_offset: bool = False,
) -> WindowPlan:
    """
    Пересчитывает номер страницы приложения в диапазон страниц TMDB.
    По умолчанию pages_to_fetch = ceil(target / upstream) без учета смещения, поэтому окно,
    начинающееся ближе к концу страницы TMDB, может оказаться короче target_page_size.
    extend_for_offset=True добавляет недостающую страницу: ceil((offset + target) / upstream)
    """
    _check_positive("application_page", application_page)
    _check_positive("target_page_size", target_page_size)
    _check_positive("upstream_page_size", upstream_page_size)

    start = (application_page - 1) * target_page_size
    offset = start % upstream_page_size
    if extend_for_offset:
        pages_to_fetch = math.ceil((offset + target_page_size) / upstream_page_size)
    else:
        pages_to_fetch = math.ceil(target_page_size / upstream_page_size)

    return WindowPlan(
        start=start,
        start_upstream_page=start // upstream_page_size + 1,
        pages_to_fetch=pages_to_fetch,
        offset=offset,
    )


def reachable_pages(
    target_page_size: int = TARGET_PAGE_SIZE,
    upstream_page_size: int = UPSTREAM_PAGE_SIZE,
    max_total_pages: int = MAX_TOTAL_PAGES,
) -> int:
    """Сколько страниц приложения помещается в max_total_pages страниц TMDB: 500 * 20 / 28 -> 358"""
    return math.ceil(max_total_pages * upstream_page_size / target_page_size)


def capped_total_pages(
    total_results,
    target_page_size: int = TARGET_PAGE_SIZE,
    max_total_pages: int = MAX_TOTAL_PAGES,
    upstream_page_size: int = UPSTREAM_PAGE_SIZE,
) -> int:
    """
    Число страниц приложения по total_results из TMDB.
    Не больше max_total_pages и не больше страниц, которые можно собрать из max_total_pages страниц TMDB
    """
    total_results = int(total_results or 0)
    return min(
        math.ceil(total_results / target_page_size),
        max_total_pages,
        reachable_pages(target_page_size, upstream_page_size, max_total_pages),
    )


def fetch_window(
    fetch_page: Callable[[int], dict],
    application_page: int,
    target_page_size: int = TARGET_PAGE_SIZE,
    upstream_page_size: int = UPSTREAM_PAGE_SIZE,
    max_total_pages: int = MAX_TOTAL_PAGES,
    extend_for_offset: bool = False,
) -> Window:
    """
    Собирает страницу приложения из нескольких страниц TMDB.
    Страницы запрашиваются параллельно и склеиваются в порядке номеров, без пересортировки.
    Ошибка любой из страниц прерывает всю операцию: частичные результаты не возвращаются.
    Страницы TMDB после max_total_pages не запрашиваются, последнее окно просто короче.
    """
    plan = plan_window(application_page, target_page_size, upstream_page_size, extend_for_offset)
    if plan.start_upstream_page > max_total_pages:
        raise PageOutOfRange(
            f"Page {application_page} is out of range: at most "
            f"{reachable_pages(target_page_size, upstream_page_size, max_total_pages)} pages are available"
        )
    pages = [page for page in plan.upstream_pages if page <= max_total_pages]

    with ThreadPoolExecutor(max_workers=len(pages)) as executor:
        responses = list(executor.map(fetch_page, pages))  # map сохраняет порядок страниц

    combined = []
    for response in responses:
        combined.extend(response.get("results") or [])

    items = combined[plan.offset:plan.offset + target_page_size]
    total_results = responses[0].get("total_results", 0) if responses else 0
    total_pages = capped_total_pages(total_results, target_page_size, max_total_pages, upstream_page_size)

    logger.debug(
        "Window OK: page=%s upstream=%s-%s offset=%s items=%s total_pages=%s",
        application_page, pages[0], pages[-1], plan.offset, len(items), total_pages,
    )
    return Window(items=items, total_pages=total_pages)
