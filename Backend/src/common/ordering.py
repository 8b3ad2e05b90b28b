"""
Gestion de l'ordre d'affichage (champ `order`) commune aux trois collections.

Toutes les operations tournent dans une transaction et verrouillent les lignes
(select_for_update) : deux editeurs concurrents ne peuvent plus entrelacer
leurs renumerotations.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Type

from django.db import models, transaction
from django.db.models import Max
from rest_framework.exceptions import NotFound

from .exceptions import OrderingError

logger = logging.getLogger(__name__)

DIRECTIONS = ("up", "down")


def next_order(model_cls: Type[models.Model]) -> int:
    """Position suivant la derniere: max(order) + 1 (1 pour une collection vide)."""
    current = model_cls.objects.aggregate(m=Max("order"))["m"]
    return (current or 0) + 1


def _save_orders(items: Iterable[models.Model]) -> None:
    for item in items:
        item.save(update_fields=["order", "updated_at"])


def _renumber(items: Sequence[models.Model]) -> None:
    for position, item in enumerate(items, start=1):
        item.order = position


def move(model_cls: Type[models.Model], pk: str, direction: str) -> List[models.Model]:
    """
    Echange l'ordre d'un element avec son voisin (ordre d'affichage).
    Un ordre absent compte comme index + 1. Retourne les deux elements modifies.
    """
    if direction not in DIRECTIONS:
        raise OrderingError(f"Direction inconnue: {direction!r} (attendu: up ou down).")

    with transaction.atomic():
        items = list(model_cls.objects.select_for_update().all())
        index = next((i for i, item in enumerate(items) if item.pk == pk), None)
        if index is None:
            raise NotFound(f"Element introuvable: {pk}")

        target = index - 1 if direction == "up" else index + 1
        if target < 0:
            raise OrderingError("L'element est deja en tete de liste.")
        if target >= len(items):
            raise OrderingError("L'element est deja en fin de liste.")

        current, neighbour = items[index], items[target]
        current_order = current.order or index + 1
        neighbour_order = neighbour.order or target + 1

        if current_order == neighbour_order:
            # ordres en doublon: on repart d'une numerotation propre
            _renumber(items)
            _save_orders(items)
            current_order, neighbour_order = index + 1, target + 1

        current.order, neighbour.order = neighbour_order, current_order
        _save_orders((current, neighbour))

    logger.info("%s %s deplace (%s) -> %s", model_cls.__name__, pk, direction, current.order)
    return [current, neighbour]


def set_order(model_cls: Type[models.Model], pk: str, order: int) -> models.Model:
    if order is None or int(order) < 0:
        raise OrderingError("Ordre invalide.")
    with transaction.atomic():
        try:
            item = model_cls.objects.select_for_update().get(pk=pk)
        except model_cls.DoesNotExist:
            raise NotFound(f"Element introuvable: {pk}")
        item.order = int(order)
        _save_orders([item])
    return item


def reorder(model_cls: Type[models.Model], ids: Optional[Sequence[str]] = None) -> List[models.Model]:
    """
    Attribue order = index + 1 en suivant `ids`.
    Sans `ids`, renumerote 1..n l'ordre d'affichage courant.
    Les elements absents de `ids` sont places a la suite, dans leur ordre courant.
    """
    with transaction.atomic():
        items = list(model_cls.objects.select_for_update().all())
        by_pk = {item.pk: item for item in items}

        if ids is None:
            ids = [item.pk for item in items]

        if len(set(ids)) != len(ids):
            raise OrderingError("La liste contient des identifiants en double.")
        missing = [pk for pk in ids if pk not in by_pk]
        if missing:
            raise OrderingError(f"Identifiants inconnus: {', '.join(map(str, missing))}")

        wanted = set(ids)
        ordered = [by_pk[pk] for pk in ids] + [item for item in items if item.pk not in wanted]
        _renumber(ordered)
        _save_orders(ordered)

    logger.info("%s: %d elements renumerotes", model_cls.__name__, len(ordered))
    return ordered
