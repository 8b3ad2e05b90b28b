from django.contrib import admin
from .models import MotorcycleModel


@admin.register(MotorcycleModel)
class MotorcycleModelAdmin(admin.ModelAdmin):
    """Back-office Django pour les fiches modeles."""

    list_display = ("id", "name", "order", "created_at", "updated_at")
    search_fields = ("name", "description")
    ordering = ("order", "-created_at")
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        (None, {"fields": ("id", "name", "description", "order")}),
        ("Medias", {"fields": ("images", "yandex_disk_link", "video_frame")}),
        ("Caracteristiques", {"fields": ("specifications",)}),
        ("Dates", {"fields": ("created_at", "updated_at")}),
    )
