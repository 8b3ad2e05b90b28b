import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from common.permissions import is_admin_token
from .serializers import LoginSerializer
from .tokens import issue_admin_token, token_expiry

logger = logging.getLogger(__name__)


class LoginView(APIView):
    """
    POST /api/auth/login/ {"password": "..."} -> {"access": "<jwt>", "expires": "<iso>"}
    """

    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "admin_login"

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning("Echec de connexion admin (request_id=%s)", getattr(request, "request_id", "-"))
            return Response(
                {"error": {"code": "authentication_failed", "detail": serializer.errors, "status": 401}},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        token = issue_admin_token()
        logger.info("Connexion admin reussie")
        return Response({"access": str(token), "expires": token_expiry(token).isoformat()})


class MeView(APIView):
    """Indique si le porteur du jeton courant est l'admin."""

    permission_classes = [permissions.AllowAny]

    def get(self, request):
        return Response({"admin": is_admin_token(request.auth)})
