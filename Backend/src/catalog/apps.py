from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Catalogue des modeles"

    def ready(self) -> None:
        # Revision du flux de changements a chaque ecriture
        from common import changes
        changes.track(self.get_model("MotorcycleModel"), "models")
