from django.urls import path
from . import views

urlpatterns = [
    path("", views.NewsListCreateView.as_view(), name="news_list"),
    path("featured/", views.FeaturedNewsView.as_view(), name="news_featured"),
    path("reorder/", views.NewsReorderView.as_view(), name="news_reorder"),
    path("<str:pk>/", views.NewsDetailView.as_view(), name="news_detail"),
    path("<str:pk>/toggle-featured/", views.NewsToggleFeaturedView.as_view(), name="news_toggle_featured"),
    path("<str:pk>/move/", views.NewsMoveView.as_view(), name="news_move"),
    path("<str:pk>/image/", views.NewsImageView.as_view(), name="news_image"),
    path("<str:pk>/document/", views.NewsDocumentView.as_view(), name="news_document"),
]
