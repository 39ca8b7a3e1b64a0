from django.urls import path

from watchlist.views import WatchlistItemView, WatchlistView

app_name = "watchlist"

urlpatterns = [
    path("", WatchlistView.as_view(), name="watchlist"),
    path("<str:media_type>/<int:media_id>/", WatchlistItemView.as_view(), name="watchlist_item"),
]
