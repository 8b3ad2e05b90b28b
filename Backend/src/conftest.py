import io

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APIClient

from accounts.tokens import issue_admin_token


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_client():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_admin_token()}")
    return client


@pytest.fixture
def make_image():
    """Fabrique un upload image en memoire: make_image(width, height, fmt, mode)."""

    def _make(width=1600, height=1200, fmt="PNG", mode="RGB", name=None, content_type=None):
        buf = io.BytesIO()
        color = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
        Image.new(mode, (width, height), color).save(buf, format=fmt)
        ext = fmt.lower()
        return SimpleUploadedFile(
            name or f"photo.{ext}",
            buf.getvalue(),
            content_type=content_type or f"image/{ext}",
        )

    return _make
