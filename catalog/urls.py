from django.urls import path

from catalog.views.browse import HomeView, MoviesView, SearchView, TVShowsView
from catalog.views.detail import MediaDetailView

app_name = "catalog"

urlpatterns = [
    path("home/", HomeView.as_view(), name="home"),
    path("movies/", MoviesView.as_view(), name="movies"),
    path("tv/", TVShowsView.as_view(), name="tv_shows"),
    path("search/", SearchView.as_view(), name="search"),
    path("<str:media_type>/<int:media_id>/", MediaDetailView.as_view(), name="media_detail"),
]
