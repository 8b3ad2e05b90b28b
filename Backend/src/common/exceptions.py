import logging
from typing import Optional

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class UserFacingAPIException(APIException):
    """
    Exception controlable et propre pour retourner un message a l'utilisateur.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Une erreur est survenue."
    default_code = "error"


class ImageRejected(UserFacingAPIException):
    """Fichier refuse (type, taille) ou image illisible."""
    default_detail = "Image refusee."
    default_code = "image_rejected"


class SpecsParseError(UserFacingAPIException):
    """Tableau de caracteristiques illisible ou format de fichier non supporte."""
    default_detail = "Impossible de lire les caracteristiques."
    default_code = "specs_parse_error"


class OrderingError(UserFacingAPIException):
    default_detail = "Deplacement impossible."
    default_code = "ordering_error"


def custom_exception_handler(exc, context) -> Optional[Response]:
    """
    Enveloppe les erreurs DRF dans un format stable:
    {"error": {"code": ..., "detail": ..., "status": ...}}
    Active via REST_FRAMEWORK['EXCEPTION_HANDLER'].
    """
    response = exception_handler(exc, context)

    if response is not None:
        data = {
            "error": {
                "code": getattr(exc, "default_code", "error"),
                "detail": response.data,
                "status": response.status_code,
            }
        }
        response.data = data
        return response

    # Erreur non geree -> 500
    view = context.get("view")
    logger.error(
        "Erreur non geree dans %s", view.__class__.__name__ if view else "?", exc_info=exc
    )
    return Response(
        {"error": {"code": "server_error", "detail": "Erreur interne", "status": 500}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
