import hmac

from django.conf import settings
from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    """Controle du mot de passe partage de l'admin (comparaison a temps constant)."""

    password = serializers.CharField(write_only=True, required=True, trim_whitespace=False)

    def validate_password(self, value: str) -> str:
        expected = settings.CATALOG_ADMIN_PASSWORD or ""
        if not expected or not hmac.compare_digest(value.encode("utf-8"), expected.encode("utf-8")):
            raise serializers.ValidationError("Mot de passe incorrect.")
        return value
