import json
import logging

from django.conf import settings
from django.core import signing

from catalog.media import CatalogItem, MediaType

logger = logging.getLogger("metflix.watchlist")

SESSION_COOKIE_SALT = "django.contrib.sessions.backends.signed_cookies"


class WatchlistFull(ValueError):
    """Новый элемент не помещается в cookie сессии"""


class Watchlist:
    """
    Список 'Буду смотреть', хранящийся в сессии браузера под одним ключом.
    В сессии лежит JSON-массив коротких снимков CatalogItem; читается один раз при создании объекта,
    каждое изменение целиком перезаписывает значение.
    Сессия живет в подписанной cookie, поэтому добавление, после которого cookie станет больше
    WATCHLIST_MAX_COOKIE_BYTES, отклоняется
    """

    def __init__(self, session, key: str | None = None) -> None:
        self._session = session
        self._key = key or settings.WATCHLIST_SESSION_KEY
        self._items: list[CatalogItem] = self._load()

    def _load(self) -> list[CatalogItem]:
        """Читает список из сессии; битые данные отбрасываются, список начинается с нуля"""
        raw = self._session.get(self._key)
        if not raw:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            items = [CatalogItem.from_dict(entry) for entry in data]
        except (TypeError, ValueError) as e:
            logger.warning("Watchlist: discarding corrupt data key=%s: %s", self._key, e)
            return []

        unique = {}
        for item in items:
            unique.setdefault(item.key, item)
        return list(unique.values())

    @staticmethod
    def _encode(items) -> str:
        return json.dumps([item.to_snapshot() for item in items], separators=(",", ":"))

    def _cookie_size(self, encoded: str) -> int:
        """Длина значения cookie, в которое signed_cookies превратит сессию с этим списком"""
        data = {**dict(self._session.items()), self._key: encoded}
        return len(signing.dumps(data, salt=SESSION_COOKIE_SALT, compress=True))

    def _save(self) -> None:
        self._session[self._key] = self._encode(self._items)

    def items(self) -> list[CatalogItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def contains(self, media_type, media_id: int) -> bool:
        key = (MediaType(media_type).value, int(media_id))
        return any(item.key == key for item in self._items)

    def add(self, item: CatalogItem) -> bool:
        """
        Добавляет короткий снимок элемента; повторное добавление того же (media_type, id) ничего не меняет.
        WatchlistFull, если список перестает помещаться в cookie
        """
        if self.contains(item.media_type, item.id):
            logger.debug("Watchlist: exists %s", item.key)
            return False

        items = [*self._items, CatalogItem.from_dict(item.to_snapshot())]
        encoded = self._encode(items)
        size = self._cookie_size(encoded)
        if size > settings.WATCHLIST_MAX_COOKIE_BYTES:
            logger.warning("Watchlist ADD FAIL: %s cookie_bytes=%s count=%s", item.key, size, len(self._items))
            raise WatchlistFull(f"Watchlist is full: {len(self._items)} items")

        self._items = items
        self._session[self._key] = encoded
        logger.info("Watchlist ADD: %s count=%s", item.key, len(self._items))
        return True

    def remove(self, media_type, media_id: int) -> bool:
        """Удаляет элемент; возвращает False, если его не было в списке"""
        key = (MediaType(media_type).value, int(media_id))
        remaining = [item for item in self._items if item.key != key]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self._save()
        logger.info("Watchlist REMOVE: %s count=%s", key, len(self._items))
        return True

    def clear(self) -> None:
        self._items = []
        self._save()
