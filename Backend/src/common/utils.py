import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Any

# Collections publiees par le catalogue (noms des fichiers JSON historiques)
COLLECTIONS = ("models", "regulations", "news")


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    """Identifiant opaque facon front historique: '<prefix>-<epoch ms>-<suffixe>'."""
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def dict_without_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


def ensure_data_dir() -> Path:
    """Cree le dossier data (base SQLite, medias) s'il manque. Appele par les points d'entree."""
    from django.conf import settings

    data_dir = Path(settings.DATA_DIR)
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir
