from django.apps import AppConfig


class CommonConfig(AppConfig):
    """Briques partagees: sante, ordre d'affichage, images, flux de changements."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "common"
    verbose_name = "Commun"
