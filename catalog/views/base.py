import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.services.media_service import MediaService, UnknownCategory
from services.pagination import PageOutOfRange
from services.tmdb import CatalogFetchError
from watchlist.store import Watchlist

logger = logging.getLogger("metflix.catalog")

API_ERROR = "Failed to fetch data from the server."


class CatalogErrorMixin:
    """Переводит ошибки каталога в HTTP-ответы: 502 при сбое TMDB, 400 при неизвестной подборке или странице"""

    def handle_exception(self, exc):
        if isinstance(exc, CatalogFetchError):
            logger.warning("Catalog FAIL: view=%s path=%s: %s", type(self).__name__, exc.path, exc)
            return Response({"detail": API_ERROR}, status=status.HTTP_502_BAD_GATEWAY)
        if isinstance(exc, (UnknownCategory, PageOutOfRange)):
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return super().handle_exception(exc)


class CatalogAPIView(CatalogErrorMixin, APIView):
    """Базовое представление каталога: общий MediaService и список 'Буду смотреть' из сессии"""
    permission_classes = [AllowAny]
    media_service_class = MediaService

    def get_media_service(self) -> MediaService:
        return self.media_service_class()

    def get_watchlist(self) -> Watchlist:
        return Watchlist(self.request.session)
