from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),

    # APIs
    path("api/common/", include("common.urls")),
    path("api/auth/", include("accounts.urls")),
    path("api/catalog/", include("catalog.urls")),
    path("api/regulations/", include("regulations.urls")),
    path("api/news/", include("news.urls")),

    # Anciens endpoints JSON (ex scripts PHP)
    path("api/", include("catalog.legacy_urls")),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
