"""
Compatibilite avec les anciens scripts PHP (load-models / save-models).

Memes formes de reponse qu'avant ({"error": "..."} en cas d'echec), mais les
donnees passent par la base unique: plus de fichier models.json modifie ici.
"""
from __future__ import annotations

import json
import logging

from django.db import DatabaseError, transaction
from django.http import JsonResponse
from django.views.decorators.http import require_GET
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound

from common import ordering
from common.exceptions import OrderingError
from common.permissions import IsCatalogAdmin
from common.utils import new_id
from .models import MotorcycleModel
from .serializers import MotorcycleModelSerializer

logger = logging.getLogger(__name__)

_JSON_OPTS = {"ensure_ascii": False}


def _error(message: str, status: int, **extra) -> JsonResponse:
    return JsonResponse({"error": message, **extra}, status=status, json_dumps_params=_JSON_OPTS)


def _ok(message: str, **extra) -> JsonResponse:
    return JsonResponse({"success": True, "message": message, **extra}, json_dumps_params=_JSON_OPTS)


@require_GET
def load_models(request):
    """GET /api/load-models -> tableau JSON brut, ordre d'affichage."""
    try:
        models = MotorcycleModelSerializer(MotorcycleModel.objects.all(), many=True).data
    except DatabaseError:
        logger.exception("load-models: lecture impossible")
        return _error("Failed to read models", 500)
    return JsonResponse(list(models), safe=False, json_dumps_params=_JSON_OPTS)


# ---------------------------------------------------------------------------
# Actions de save-models
# ---------------------------------------------------------------------------

def _add_model(data: dict) -> JsonResponse:
    payload = data.get("model")
    if not isinstance(payload, dict):
        return _error("Model data required", 400)

    model_id = str(payload.get("id") or "")
    if not model_id or MotorcycleModel.objects.filter(pk=model_id).exists():
        model_id = new_id("vmc")

    serializer = MotorcycleModelSerializer(data=payload)
    if not serializer.is_valid():
        return _error("Invalid model data", 400, details=serializer.errors)

    order = serializer.validated_data.get("order")
    if order is None:
        order = MotorcycleModel.objects.count() + 1
    instance = serializer.save(id=model_id, order=order)
    logger.info("save-models/add_model: %s", instance.pk)
    return _ok("Modele ajoute", modelId=instance.pk)


def _update_model(data: dict) -> JsonResponse:
    payload = data.get("model")
    if not isinstance(payload, dict):
        return _error("Model data required", 400)

    instance = MotorcycleModel.objects.filter(pk=payload.get("id")).first()
    if instance is None:
        return _error("Model not found", 404)

    # remplacement complet, createdAt conserve
    serializer = MotorcycleModelSerializer(instance, data=payload)
    if not serializer.is_valid():
        return _error("Invalid model data", 400, details=serializer.errors)
    serializer.save()
    return _ok("Modele mis a jour")


def _delete_model(data: dict) -> JsonResponse:
    model_id = data.get("modelId")
    if not model_id:
        return _error("Model ID required", 400)

    deleted, _ = MotorcycleModel.objects.filter(pk=model_id).delete()
    if not deleted:
        return _error("Model not found", 404)
    return _ok("Modele supprime")


def _update_order(data: dict) -> JsonResponse:
    if not data.get("modelId") or data.get("order") is None:
        return _error("Model ID and order required", 400)
    try:
        ordering.set_order(MotorcycleModel, data["modelId"], int(data["order"]))
    except (TypeError, ValueError, OrderingError):
        return _error("Invalid order", 400)
    except NotFound:
        return _error("Model not found", 404)
    return _ok("Ordre du modele mis a jour")


ACTIONS = {
    "add_model": _add_model,
    "update_model": _update_model,
    "delete_model": _delete_model,
    "update_order": _update_order,
}


@api_view(["POST"])
@permission_classes([IsCatalogAdmin])
def save_models(request):
    """POST /api/save-models {"action": "...", ...} (jeton admin requis)"""
    try:
        data = json.loads(request.body or b"")
    except ValueError:
        return _error("Invalid JSON", 400)

    if not isinstance(data, dict) or not data.get("action"):
        return _error("Action required", 400)

    action = data["action"]
    handler = ACTIONS.get(action)
    if handler is None:
        return _error(f"Unknown action: {action}", 400)

    try:
        with transaction.atomic():
            return handler(data)
    except DatabaseError:
        logger.exception("save-models: echec de l'action %s", action)
        return _error("Internal server error", 500)
