import logging
from concurrent.futures import ThreadPoolExecutor

from django.http import Http404
from rest_framework.response import Response

from catalog.media import MediaType
from catalog.services.context import build_detail_context
from catalog.views.base import CatalogAPIView

logger = logging.getLogger("metflix.catalog")


class MediaDetailView(CatalogAPIView):
    """Подробная информация о фильме или сериале для модального окна: детали, актёры, трейлеры"""

    def get(self, request, *args, **kwargs):
        try:
            media_type = MediaType(self.kwargs["media_type"])
        except ValueError:
            raise Http404("Unknown media type")
        media_id = self.kwargs["media_id"]
        service = self.get_media_service()

        with ThreadPoolExecutor(max_workers=3) as ex:
            fd = ex.submit(service.get_details, media_type, media_id)
            fc = ex.submit(service.get_credits, media_type, media_id)
            fv = ex.submit(service.get_videos, media_type, media_id)
            details = fd.result()
            credits = fc.result()
            videos = fv.result()

        context = build_detail_context(media_type, details, credits, videos, self.get_watchlist())
        if not context:
            raise Http404("Content not found.")

        logger.debug("Detail OK: type=%s id=%s trailers=%s", media_type.value, media_id, len(context["trailers"]))
        return Response(context)
