from django.urls import path
from . import views

urlpatterns = [
    path("", views.RegulationListCreateView.as_view(), name="regulations_list"),
    path("categories/", views.RegulationCategoriesView.as_view(), name="regulations_categories"),
    path("reorder/", views.RegulationReorderView.as_view(), name="regulations_reorder"),
    path("<str:pk>/", views.RegulationDetailView.as_view(), name="regulation_detail"),
    path("<str:pk>/move/", views.RegulationMoveView.as_view(), name="regulation_move"),
    path("<str:pk>/screenshot/", views.RegulationScreenshotView.as_view(), name="regulation_screenshot"),
]
