from django.contrib import admin
from .models import News


@admin.register(News)
class NewsAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "category", "featured", "published", "publish_date", "order")
    list_filter = ("category", "featured", "published")
    search_fields = ("title", "excerpt", "content")
    ordering = ("order",)
    readonly_fields = ("created_at", "updated_at")
