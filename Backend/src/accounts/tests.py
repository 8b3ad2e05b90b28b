import time

import pytest
from django.urls import reverse
from rest_framework_simplejwt.backends import TokenBackend

from catalog.models import MotorcycleModel


@pytest.mark.django_db
def test_login_with_shared_password_and_me(api_client, settings):
    # 1) Mauvais mot de passe
    r = api_client.post(reverse("admin_login"), {"password": "nope"}, format="json")
    assert r.status_code == 401
    assert r.data["error"]["code"] == "authentication_failed"

    # 2) Bon mot de passe -> jeton
    r = api_client.post(
        reverse("admin_login"), {"password": settings.CATALOG_ADMIN_PASSWORD}, format="json"
    )
    assert r.status_code == 200, r.content
    assert "access" in r.data and "expires" in r.data
    token = r.data["access"]

    # 3) /me anonyme puis authentifie
    r = api_client.get(reverse("me"))
    assert r.data == {"admin": False}

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    r = api_client.get(reverse("me"))
    assert r.status_code == 200
    assert r.data == {"admin": True}


@pytest.mark.django_db
def test_login_requires_password(api_client):
    r = api_client.post(reverse("admin_login"), {}, format="json")
    assert r.status_code == 401


@pytest.mark.django_db
def test_garbage_token_is_rejected(api_client):
    api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")
    r = api_client.get(reverse("me"))
    assert r.status_code == 401


@pytest.mark.django_db
def test_token_signed_with_dev_key_is_rejected(api_client, settings):
    from config.settings.base import DEV_SECRET_KEY

    assert settings.SECRET_KEY != DEV_SECRET_KEY
    forged = TokenBackend("HS256", signing_key=DEV_SECRET_KEY).encode({
        "token_type": "access",
        "exp": int(time.time()) + 3600,
        "jti": "forged",
        "user_id": "catalog-admin",
        "role": "admin",
    })
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {forged}")

    r = api_client.post(reverse("catalog_models"), {"name": "intrus"}, format="json")
    assert r.status_code == 401
    assert not MotorcycleModel.objects.exists()
