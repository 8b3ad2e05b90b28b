import json
import logging
import os
import platform
import sys
from pathlib import Path
from typing import Any, Dict, Tuple

import django
from django.conf import settings
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .utils import COLLECTIONS, now_utc

logger = logging.getLogger(__name__)

MIN_PYTHON = (3, 10)


def health(request):
    """
    Endpoint de sante tres simple.
    GET /api/common/health -> {"status":"ok","service":"django"}
    """
    return JsonResponse({"status": "ok", "service": "django"})


def build_health_report() -> Tuple[Dict[str, Any], int]:
    """
    Rapport de disponibilite detaille (ancien health-check.php).
    status: ok | warning | error. HTTP 500 seulement si error.
    """
    results: Dict[str, Any] = {
        "timestamp": now_utc().isoformat(),
        "checks": {},
        "status": "ok",
        "errors": [],
        "warnings": [],
    }
    checks = results["checks"]

    def fail(message: str) -> None:
        results["errors"].append(message)
        results["status"] = "error"

    def warn(message: str) -> None:
        results["warnings"].append(message)
        if results["status"] == "ok":
            results["status"] = "warning"

    # ----- Python -----
    py_ok = sys.version_info >= MIN_PYTHON
    checks["python_version"] = {
        "status": "ok" if py_ok else "error",
        "value": platform.python_version(),
        "required": "%d.%d+" % MIN_PYTHON,
    }
    if not py_ok:
        fail("Version de Python trop ancienne")

    # ----- Base de donnees -----
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        checks["database"] = {"status": "ok", "vendor": connection.vendor}
    except DatabaseError as e:
        logger.exception("health-check: base de donnees indisponible")
        checks["database"] = {"status": "error", "vendor": connection.vendor}
        fail(f"Base de donnees indisponible: {e}")

    # ----- Dossier data -----
    data_dir = Path(settings.DATA_DIR)
    checks["data_directory"] = {
        "status": "ok" if data_dir.is_dir() else "error",
        "path": str(data_dir.resolve()),
        "exists": data_dir.is_dir(),
    }
    if not data_dir.is_dir():
        fail(f"Le dossier data n'existe pas: {data_dir}")
    else:
        writable = os.access(data_dir, os.W_OK)
        checks["data_writable"] = {"status": "ok" if writable else "error", "writable": writable}
        if not writable:
            fail("Le dossier data n'est pas accessible en ecriture")

        test_file = data_dir / "test_write.tmp"
        try:
            written = test_file.write_text("test")
            test_file.unlink()
            checks["write_test"] = {"status": "ok", "bytes_written": written}
        except OSError as e:
            checks["write_test"] = {"status": "error", "bytes_written": False}
            fail(f"Impossible d'ecrire un fichier de test dans data: {e}")

    # ----- Fichiers JSON du catalogue -----
    fixtures_dir = Path(settings.FIXTURES_DIR)
    for name in COLLECTIONS:
        path = fixtures_dir / f"{name}.json"
        check: Dict[str, Any] = {"status": "ok", "path": str(path), "exists": path.exists()}
        checks[f"{name}_file"] = check
        if not path.exists():
            check["status"] = "warning"
            warn(f"Le fichier {name}.json n'existe pas (cree par export_fixtures)")
            continue

        check["size"] = path.stat().st_size
        try:
            decoded = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            check["status"] = "error"
            check["json_error"] = str(e)
            fail(f"Le fichier {name}.json contient un JSON invalide: {e}")
            continue
        check["count"] = len(decoded) if isinstance(decoded, list) else 0

    results["server_info"] = {
        "python_version": platform.python_version(),
        "django_version": django.get_version(),
        "platform": platform.platform(),
        "debug": bool(settings.DEBUG),
        "current_time": now_utc().isoformat(),
        "timezone": settings.TIME_ZONE,
    }

    recommendations = []
    if results["status"] == "error":
        recommendations.append("Corrigez toutes les erreurs avant d'utiliser le systeme")
    if results["warnings"]:
        recommendations.append("Traitez les avertissements pour un fonctionnement optimal")
    if results["status"] == "ok":
        recommendations.append("Systeme pret!")
    results["recommendations"] = recommendations

    return results, (500 if results["status"] == "error" else 200)


@require_GET
def health_check(request):
    """GET /api/health-check -> rapport detaille."""
    report, status_code = build_health_report()
    return JsonResponse(report, status=status_code, json_dumps_params={"ensure_ascii": False})
