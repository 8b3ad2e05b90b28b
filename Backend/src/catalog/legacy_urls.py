from django.urls import path

from common.health import health_check
from . import legacy_views

urlpatterns = [
    path("health-check", health_check, name="legacy_health_check"),
    path("load-models", legacy_views.load_models, name="legacy_load_models"),
    path("save-models", legacy_views.save_models, name="legacy_save_models"),
]
