from django.apps import AppConfig


class NewsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "news"
    verbose_name = "Actualites"

    def ready(self) -> None:
        from common import changes
        changes.track(self.get_model("News"), "news")
