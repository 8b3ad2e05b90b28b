from datetime import datetime, timezone

from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from common.permissions import ADMIN_ROLE

# Pas de table utilisateur: l'identifiant du jeton est fixe
ADMIN_SUBJECT = "catalog-admin"


def issue_admin_token() -> AccessToken:
    """Emet un jeton d'acces signe portant le role admin."""
    token = AccessToken()
    token[api_settings.USER_ID_CLAIM] = ADMIN_SUBJECT
    token["role"] = ADMIN_ROLE
    return token


def token_expiry(token: AccessToken) -> datetime:
    return datetime.fromtimestamp(token["exp"], tz=timezone.utc)
