"""Routing for article detail and edit-lock endpoints."""

from django.urls import path

from .views import ArticleDetailView, ArticleLockView

urlpatterns = [
    path("articles/<slug:slug>/", ArticleDetailView.as_view(), name="article-detail"),
    path("articles/<slug:slug>/lock/", ArticleLockView.as_view(), name="article-lock"),
]
