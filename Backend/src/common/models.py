from django.db import models
from django.db.models import F
from django.utils import timezone


class OrderedRecord(models.Model):
    """
    Base commune des fiches du catalogue (modeles, reglements, actualites).

    - order: entier mutable reattribue a chaque deplacement (null = en fin de liste)
    - created_at: fixe a la creation, conserve a la mise a jour
    - updated_at: rafraichi a chaque sauvegarde
    """

    order = models.PositiveIntegerField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = [F("order").asc(nulls_last=True), "-created_at"]
