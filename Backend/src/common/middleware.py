import logging
import time
import uuid
from typing import Callable
from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class RequestIDMiddleware:
    """
    Ajoute un identifiant de requete a chaque reponse.
    - Header de sortie: X-Request-ID
    - Accessible via request.request_id
    - Les ecritures sur /api/ sont tracees (methode, chemin, statut, duree)
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        setattr(request, "request_id", request_id)

        started = time.monotonic()
        response = self.get_response(request)
        response.headers["X-Request-ID"] = request_id

        if request.method not in ("GET", "HEAD", "OPTIONS") and request.path.startswith("/api/"):
            logger.info(
                "[%s] %s %s -> %s (%.0f ms)",
                request_id, request.method, request.path, response.status_code,
                (time.monotonic() - started) * 1000,
            )
        return response
