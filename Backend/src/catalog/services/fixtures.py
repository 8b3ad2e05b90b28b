"""
Import / export des fichiers JSON historiques (models.json, regulations.json,
news.json), format camelCase identique a l'API.

L'export sauvegarde d'abord le fichier existant en <nom>.backup.json.
"""
from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Type

from django.db import models, transaction
from django.utils.dateparse import parse_datetime
from rest_framework import serializers

from common.utils import COLLECTIONS, dict_without_none
from catalog.models import MotorcycleModel
from catalog.serializers import MotorcycleModelSerializer
from news.models import News
from news.serializers import NewsSerializer
from regulations.models import Regulation
from regulations.serializers import RegulationSerializer

logger = logging.getLogger(__name__)

REGISTRY: Dict[str, Tuple[Type[models.Model], Type[serializers.ModelSerializer]]] = {
    "models": (MotorcycleModel, MotorcycleModelSerializer),
    "regulations": (Regulation, RegulationSerializer),
    "news": (News, NewsSerializer),
}


class FixtureError(Exception):
    """Enregistrement invalide dans un fichier JSON."""


def _entry(collection: str):
    if collection not in REGISTRY:
        raise FixtureError(f"Collection inconnue: {collection} (attendu: {', '.join(COLLECTIONS)})")
    return REGISTRY[collection]


def load_records(collection: str, records: Iterable[dict], force: bool = False) -> int:
    """
    Insere les enregistrements si la collection est vide.
    Avec force=True la collection est remplacee. Retourne le nombre insere.
    """
    model_cls, serializer_cls = _entry(collection)

    with transaction.atomic():
        if model_cls.objects.exists():
            if not force:
                logger.info("%s: deja des donnees, import ignore", collection)
                return 0
            model_cls.objects.all().delete()

        count = 0
        for position, raw in enumerate(records, start=1):
            record = dict_without_none(dict(raw))
            record_id = record.pop("id", None)
            created = parse_datetime(record.pop("createdAt", "") or "")
            record.pop("updatedAt", None)

            serializer = serializer_cls(data=record)
            if not serializer.is_valid():
                raise FixtureError(f"{collection}[{position}] ({record_id}): {serializer.errors}")

            extra = {}
            if record_id:
                extra["id"] = str(record_id)
            if created:
                extra["created_at"] = created
            if serializer.validated_data.get("order") is None:
                extra["order"] = position
            serializer.save(**extra)
            count += 1

    logger.info("%s: %d enregistrements importes", collection, count)
    return count


def load_file(collection: str, directory: Path, force: bool = False) -> int:
    path = Path(directory) / f"{collection}.json"
    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise FixtureError(f"{path}: JSON invalide ({e})") from e
    if not isinstance(records, list):
        raise FixtureError(f"{path}: une liste d'enregistrements est attendue")
    return load_records(collection, records, force=force)


def dump_records(collection: str) -> List[dict]:
    model_cls, serializer_cls = _entry(collection)
    return serializer_cls(model_cls.objects.all(), many=True).data


def export_file(collection: str, directory: Path) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{collection}.json"

    if path.exists():
        backup = directory / f"{collection}.backup.json"
        shutil.copyfile(path, backup)
        logger.info("%s: sauvegarde de %s vers %s", collection, path.name, backup.name)

    records = dump_records(collection)
    path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
    return path
