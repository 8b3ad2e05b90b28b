import secrets
import tempfile

from .base import *

# Tests
DEBUG = True

# DB sqlite en memoire par defaut pour rapidite
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Auth plus legere en test
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Email capture en memoire
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

# Fichiers uploades et fixtures dans des dossiers jetables
DATA_DIR = Path(tempfile.mkdtemp(prefix="vmc-data-"))
MEDIA_ROOT = tempfile.mkdtemp(prefix="vmc-media-")
FIXTURES_DIR = Path(tempfile.mkdtemp(prefix="vmc-fixtures-"))

CATALOG_ADMIN_PASSWORD = "test-admin-pass"

# Le login est appele par plusieurs tests dans le meme process
REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_RATES": {"admin_login": "1000/min"},
}

# Cle propre aux tests: un jeton signe avec la cle de dev doit etre refuse
SECRET_KEY = secrets.token_urlsafe(50)
SIMPLE_JWT = {**SIMPLE_JWT, "SIGNING_KEY": SECRET_KEY}
