from django.apps import AppConfig


class RegulationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "regulations"
    verbose_name = "Reglements d'entretien"

    def ready(self) -> None:
        from common import changes
        changes.track(self.get_model("Regulation"), "regulations")
