from django.urls import path
from . import views

urlpatterns = [
    # Modeles
    path("models/", views.ModelListCreateView.as_view(), name="catalog_models"),
    path("models/reorder/", views.ModelReorderView.as_view(), name="catalog_models_reorder"),
    path("models/<str:pk>/", views.ModelDetailView.as_view(), name="catalog_model_detail"),
    path("models/<str:pk>/move/", views.ModelMoveView.as_view(), name="catalog_model_move"),
    path("models/<str:pk>/order/", views.ModelOrderView.as_view(), name="catalog_model_order"),

    # Images
    path("models/<str:pk>/images/", views.ModelImagesView.as_view(), name="catalog_model_images"),
    path("models/<str:pk>/images/<int:index>/", views.ModelImageDeleteView.as_view(), name="catalog_model_image_delete"),

    # Caracteristiques
    path("specs/parse", views.SpecsParseView.as_view(), name="catalog_specs_parse"),
    path("models/<str:pk>/specs/import", views.ModelSpecsImportView.as_view(), name="catalog_model_specs_import"),
    path("models/<str:pk>/specs/export", views.ModelSpecsExportView.as_view(), name="catalog_model_specs_export"),
]
