from django.urls import path

from . import views

urlpatterns = [
    path("resolve", views.resolve, name="resolve"),
    path("search", views.search, name="search"),
    path("suggestions", views.suggestions, name="suggestions"),
    path("bangs", views.bangs, name="bangs"),
    path("refresh-bangs", views.refresh_bangs, name="refresh-bangs"),
    path("clear-cache", views.clear_bangs_cache, name="clear-bangs-cache"),
    path("bangs/<str:trigger>", views.bang_detail, name="bang-detail"),
    path("open", views.open_url, name="open-url"),
]
