from django.db import models

from common.models import OrderedRecord
from common.utils import new_id


def new_model_id() -> str:
    return new_id("vmc")


class MotorcycleModel(OrderedRecord):
    """
    Fiche d'un modele (moto / quad) du catalogue.

    - images: data URLs JPEG compressees (ou URLs externes)
    - specifications: tableau cle/valeur des caracteristiques
    - yandex_disk_link: lien media externe (photos HD, brochures)
    - video_frame: code <iframe> d'integration video
    """

    id = models.CharField(primary_key=True, max_length=64, default=new_model_id)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    images = models.JSONField(default=list, blank=True)
    specifications = models.JSONField(default=dict, blank=True)
    yandex_disk_link = models.URLField(max_length=500, blank=True, default="")
    video_frame = models.TextField(blank=True, default="")

    class Meta(OrderedRecord.Meta):
        db_table = "vmc_models"
        verbose_name = "Modele"
        verbose_name_plural = "Modeles"

    def __str__(self) -> str:
        return self.name
