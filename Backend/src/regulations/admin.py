from django.contrib import admin
from .models import Regulation


@admin.register(Regulation)
class RegulationAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "category", "order", "updated_at")
    list_filter = ("category",)
    search_fields = ("title", "description", "content")
    ordering = ("order",)
    readonly_fields = ("created_at", "updated_at")
