from django.urls import include, path
from django.views.generic import RedirectView

from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

schema_view = get_schema_view(
    openapi.Info(
        title="Metflix API",
        default_version="v1",
        description="Catalog browsing and watchlist API",
    ),
    public=True,
    permission_classes=[
        permissions.AllowAny,
    ],
)

urlpatterns = [
    path("", RedirectView.as_view(url="/api/catalog/home/", permanent=False)),
    path("api/catalog/", include("catalog.urls", namespace="catalog")),
    path("api/watchlist/", include("watchlist.urls", namespace="watchlist")),
    path("swagger/", schema_view.with_ui("swagger", cache_timeout=0), name="schema-swagger-ui"),
    path("redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
]
