from django.db import models

from common.models import OrderedRecord
from common.utils import new_id


def new_regulation_id() -> str:
    return new_id("reg")


class Regulation(OrderedRecord):
    """Document d'entretien / d'exploitation (contenu markdown + liens de telechargement)."""

    class Category(models.TextChoices):
        MAINTENANCE = "maintenance", "Техобслуживание"
        OPERATION = "operation", "Эксплуатация"
        SAFETY = "safety", "Безопасность"
        WARRANTY = "warranty", "Гарантия"
        TECHNICAL = "technical", "Технические"

    id = models.CharField(primary_key=True, max_length=64, default=new_regulation_id)
    title = models.CharField(max_length=300)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=32, choices=Category.choices, default=Category.MAINTENANCE)
    content = models.TextField(blank=True, default="")
    screenshot = models.TextField(blank=True, default="")
    download_pdf = models.URLField(max_length=500, blank=True, default="")
    download_word = models.URLField(max_length=500, blank=True, default="")

    class Meta(OrderedRecord.Meta):
        db_table = "vmc_regulations"
        verbose_name = "Reglement"
        verbose_name_plural = "Reglements"

    def __str__(self) -> str:
        return self.title
