import os

from django.conf import settings
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from . import changes
from .utils import COLLECTIONS


class PingView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response({"pong": True})


class InfoView(APIView):
    """
    GET /api/common/info -> environnement et limites d'upload (rien de sensible)
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response({
            "debug": bool(settings.DEBUG),
            "env": os.getenv("DJANGO_ENV", "local"),
            "collections": list(COLLECTIONS),
            "images": {
                "maxWidth": settings.IMAGE_MAX_WIDTH,
                "jpegQuality": settings.IMAGE_JPEG_QUALITY,
                "maxUploadBytes": settings.IMAGE_MAX_UPLOAD_BYTES,
            },
            "documentMaxUploadBytes": settings.DOCUMENT_MAX_UPLOAD_BYTES,
        })


class ChangesView(APIView):
    """
    GET /api/common/changes -> {"models": {"revision": 3, "updatedAt": "..."}, ...}
    Le client recharge une collection entiere quand sa revision change.
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response(changes.snapshot())
