from rest_framework import serializers

from catalog.media import CatalogItem, MediaType


class CatalogItemSerializer(serializers.Serializer):
    """Сериализатор снимка элемента каталога (фильм или сериал)"""
    media_type = serializers.ChoiceField(choices=[m.value for m in MediaType])
    id = serializers.IntegerField(min_value=1)
    title = serializers.CharField(max_length=500)
    overview = serializers.CharField(required=False, allow_blank=True, default="")
    poster_path = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    backdrop_path = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    release_date = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    vote_average = serializers.FloatField(required=False, min_value=0, max_value=10, default=0.0)
    genre_ids = serializers.ListField(child=serializers.IntegerField(), required=False, default=list)

    def to_item(self) -> CatalogItem:
        """Строит CatalogItem из провалидированных данных"""
        return CatalogItem.from_dict(self.validated_data)


class PageQuerySerializer(serializers.Serializer):
    """Параметры постраничного запроса: номер страницы и подборка"""
    page = serializers.IntegerField(min_value=1, default=1)
    category = serializers.CharField(required=False, default="popular")


class SearchQuerySerializer(serializers.Serializer):
    """Параметры поиска: строка, тип (multi/movie/tv), страница"""
    q = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=True)
    type = serializers.ChoiceField(choices=["multi", "movie", "tv"], required=False, default="multi")
    page = serializers.IntegerField(min_value=1, default=1)
