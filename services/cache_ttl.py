TMDB_TTL = {
    "detail": 60 * 60 * 12,  # 12 часов
    "credits": 60 * 60 * 12,  # 12 часов
    "videos": 60 * 60 * 12,  # 12 часов
    "search": 60 * 10,  # 10 минут
    "popular": 60 * 60 * 3,  # 3 часа
    "top_rated": 60 * 60 * 12,  # 12 часов
    "trending": 60 * 60 * 3,  # 3 часа
}
