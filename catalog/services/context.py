from catalog.media import CatalogItem, MediaType
from catalog.services.utils import (
    build_image_url,
    extract_year,
    format_duration,
    format_nums,
    format_rating,
    rating_color,
)

MAX_TRAILERS = 3
MAX_CAST = 10


def select_trailers(videos, limit: int = MAX_TRAILERS) -> list[dict]:
    """Оставляет только трейлеры с YouTube, не больше limit"""
    trailers = [v for v in videos or [] if v.get("type") == "Trailer" and v.get("site") == "YouTube"]
    return [
        {
            "key": v.get("key"),
            "name": v.get("name"),
            "url": f"https://www.youtube.com/watch?v={v.get('key')}",
        }
        for v in trailers[:limit]
    ]


def get_crew_member(credits, job):
    """Возвращает первого участника команды (crew) с указанной должностью"""
    return next((p for p in credits.get("crew", []) if p.get("job") == job), None)


def build_detail_context(media_type, details: dict, credits: dict | None = None, videos=None, watchlist=None) -> dict | None:
    """Возвращает единый контекст для модального окна с подробностями фильма или сериала"""
    if not details or not details.get("id"):
        return None

    media_type = MediaType(media_type)
    credits = credits or {}
    item = CatalogItem.from_tmdb(details, media_type)

    context = {
        "media_type": media_type.value,
        "id": item.id,
        "title": item.title,
        "tagline": details.get("tagline"),
        "overview": item.overview,
        "genres": [g.get("name") for g in details.get("genres", [])],
        "poster_url": build_image_url(item.poster_path, "LARGE"),
        "backdrop_url": build_image_url(item.backdrop_path, "LARGE", "backdrop"),
        "release_year": extract_year(item.release_date),
        "rating": format_rating(item.vote_average),
        "rating_color": rating_color(item.vote_average),
        "vote_count": format_nums(details.get("vote_count")),
        "status": details.get("status"),
        "homepage": details.get("homepage") or None,
        "actors": [
            {
                "name": actor["name"],
                "character": actor.get("character"),
                "photo": build_image_url(actor.get("profile_path"), "SMALL"),
            }
            for actor in credits.get("cast", [])[:MAX_CAST]
        ],
        "trailers": select_trailers(videos),
        "in_watchlist": bool(watchlist and watchlist.contains(media_type, item.id)),
        "snapshot": item.to_dict(),
    }

    if item.is_movie:
        director = get_crew_member(credits, "Director")
        context.update(
            {
                "runtime": format_duration(details.get("runtime")),
                "director": [director.get("name")] if director else [],
                "budget": format_nums(details.get("budget")),
                "revenue": format_nums(details.get("revenue")),
            }
        )
    else:
        run_times = details.get("episode_run_time") or []
        context.update(
            {
                "runtime": format_duration(run_times[0]) if run_times else "—",
                "created_by": [c.get("name") for c in details.get("created_by", [])],
                "number_of_seasons": details.get("number_of_seasons"),
                "number_of_episodes": details.get("number_of_episodes"),
                "networks": [n.get("name") for n in details.get("networks", [])],
            }
        )
    return context
