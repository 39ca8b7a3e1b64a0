import logging

from django.http import Http404
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.media import MediaType
from catalog.serializers import CatalogItemSerializer
from catalog.services.builders import build_media_cards
from watchlist.store import Watchlist, WatchlistFull

logger = logging.getLogger("metflix.watchlist")


class WatchlistView(APIView):
    """Список 'Буду смотреть': просмотр и добавление"""
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        watchlist = Watchlist(request.session)
        items = watchlist.items()
        return Response({"items": build_media_cards(items, watchlist), "count": len(items)})

    def post(self, request, *args, **kwargs):
        """Добавляет снимок элемента каталога в список"""
        serializer = CatalogItemSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning("Watchlist ADD: invalid payload errors=%s", serializer.errors)
            return Response({"status": "error", "errors": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        watchlist = Watchlist(request.session)
        try:
            added = watchlist.add(serializer.to_item())
        except WatchlistFull as e:
            return Response(
                {"status": "error", "message": str(e), "count": len(watchlist)},
                status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )
        if added:
            return Response({"status": "added", "count": len(watchlist)}, status=status.HTTP_201_CREATED)
        return Response({"status": "exists", "count": len(watchlist)})


class WatchlistItemView(APIView):
    """Удаление элемента из списка 'Буду смотреть'"""
    permission_classes = [AllowAny]

    def delete(self, request, *args, **kwargs):
        try:
            media_type = MediaType(self.kwargs["media_type"])
        except ValueError:
            raise Http404("Unknown media type")

        watchlist = Watchlist(request.session)
        if not watchlist.remove(media_type, self.kwargs["media_id"]):
            return Response({"status": "error", "message": "Not in watchlist"}, status=status.HTTP_404_NOT_FOUND)
        return Response({"status": "removed", "count": len(watchlist)})
