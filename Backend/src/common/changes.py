"""
Flux de changements par collection.

Chaque sauvegarde/suppression incremente une revision en cache; les clients
comparent la revision et rechargent la collection complete si elle a bouge.
"""
from __future__ import annotations

import logging
from typing import Dict

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save

from .utils import COLLECTIONS, now_utc

logger = logging.getLogger(__name__)


def _revision_key(collection: str) -> str:
    return f"changes:{collection}:revision"


def _stamp_key(collection: str) -> str:
    return f"changes:{collection}:updated_at"


def bump(collection: str) -> int:
    key = _revision_key(collection)
    cache.add(key, 0, timeout=None)
    revision = cache.incr(key)
    cache.set(_stamp_key(collection), now_utc().isoformat(), timeout=None)
    return revision


def snapshot() -> Dict[str, dict]:
    return {
        c: {
            "revision": cache.get(_revision_key(c), 0),
            "updatedAt": cache.get(_stamp_key(c)),
        }
        for c in COLLECTIONS
    }


def track(model_cls, collection: str) -> None:
    """Branche post_save/post_delete du modele sur la revision de `collection`."""

    def _on_change(sender, instance, **kwargs):
        revision = bump(collection)
        logger.debug("%s: revision %s (%s)", collection, revision, instance.pk)

    uid = f"changes-{collection}"
    post_save.connect(_on_change, sender=model_cls, weak=False, dispatch_uid=f"{uid}-save")
    post_delete.connect(_on_change, sender=model_cls, weak=False, dispatch_uid=f"{uid}-delete")
