from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import List, Optional

SNAPSHOT_FIELDS = ("media_type", "id", "title", "poster_path", "release_date", "vote_average")


class MediaType(str, Enum):
    """Тип элемента каталога: фильм или сериал"""
    MOVIE = "movie"
    TV = "tv"


@dataclass(frozen=True)
class CatalogItem:
    """
    Элемент каталога TMDB (фильм или сериал).
    media_type проставляется при получении ответа API по эндпоинту, из которого пришла запись,
    а не угадывается по набору полей
    """
    media_type: MediaType
    id: int
    title: str
    overview: str = ""
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: float = 0.0
    genre_ids: List[int] = field(default_factory=list)

    @property
    def key(self) -> tuple:
        return self.media_type.value, self.id

    @property
    def is_movie(self) -> bool:
        return self.media_type is MediaType.MOVIE

    @classmethod
    def from_tmdb(cls, raw: dict, media_type) -> "CatalogItem":
        """Строит элемент из сырого словаря TMDB: у фильмов title/release_date, у сериалов name/first_air_date"""
        media_type = MediaType(media_type)
        if media_type is MediaType.MOVIE:
            title = raw.get("title") or raw.get("original_title") or ""
            release_date = raw.get("release_date")
        else:
            title = raw.get("name") or raw.get("original_name") or ""
            release_date = raw.get("first_air_date")

        return cls(
            media_type=media_type,
            id=int(raw["id"]),
            title=title,
            overview=raw.get("overview") or "",
            poster_path=raw.get("poster_path"),
            backdrop_path=raw.get("backdrop_path"),
            release_date=release_date or None,
            vote_average=float(raw.get("vote_average") or 0),
            genre_ids=list(raw.get("genre_ids") or [g["id"] for g in raw.get("genres", []) if "id" in g]),
        )

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogItem":
        """Восстанавливает элемент из JSON-снимка (например, из списка 'Буду смотреть')"""
        if not isinstance(data, dict) or data.get("id") is None:
            raise ValueError(f"Catalog item snapshot without id: {data!r}")
        try:
            media_type = MediaType(data.get("media_type"))
        except ValueError:
            raise ValueError(f"Unknown media type: {data.get('media_type')!r}") from None

        return cls(
            media_type=media_type,
            id=int(data["id"]),
            title=data.get("title") or "",
            overview=data.get("overview") or "",
            poster_path=data.get("poster_path"),
            backdrop_path=data.get("backdrop_path"),
            release_date=data.get("release_date"),
            vote_average=float(data.get("vote_average") or 0),
            genre_ids=list(data.get("genre_ids") or []),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["media_type"] = self.media_type.value
        return data

    def to_snapshot(self) -> dict:
        """Короткий снимок для списка 'Буду смотреть': только поля, нужные карточке"""
        data = self.to_dict()
        return {name: data[name] for name in SNAPSHOT_FIELDS}


def items_from_response(response: dict, media_type) -> List[CatalogItem]:
    """Превращает results ответа TMDB в список CatalogItem, пропуская записи без id"""
    return [CatalogItem.from_tmdb(raw, media_type) for raw in response.get("results") or [] if raw.get("id")]
