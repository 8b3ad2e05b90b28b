import os
from datetime import timedelta
from pathlib import Path

# ----- Paths -----
# Base du projet (3 niveaux au-dessus de config/settings/base.py)
BASE_DIR = Path(__file__).resolve().parent.parent.parent
# Cree au demarrage (manage.py, wsgi, asgi), pas a l'import des settings
DATA_DIR = Path(os.getenv("CATALOG_DATA_DIR", str(BASE_DIR / "data")))

# Fichiers JSON statiques (models.json, regulations.json, news.json)
FIXTURES_DIR = Path(os.getenv("CATALOG_FIXTURES_DIR", str(DATA_DIR / "fixtures")))

# ----- Core -----
# Cle de dev: refusee par config.settings.prod
DEV_SECRET_KEY = "dev_only_change_me"
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", DEV_SECRET_KEY)
DEBUG = os.getenv("DJANGO_DEBUG", "0") == "1"

# ALLOWED_HOSTS par defaut + env
_default_hosts = {"localhost", "127.0.0.1", "[::1]"}
ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if h] or list(_default_hosts)

# ----- Applications -----
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # 3rd party
    "rest_framework",
    "corsheaders",

    # project apps
    "common",
    "accounts",
    "catalog",
    "regulations",
    "news",
]

# ----- Middleware -----
MIDDLEWARE = [
    # ordre recommande
    "django.middleware.security.SecurityMiddleware",

    # cors avant CommonMiddleware
    "corsheaders.middleware.CorsMiddleware",

    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",

    "common.middleware.RequestIDMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"
ASGI_APPLICATION = "config.asgi.application"

# ----- Database (unique backend: modeles, reglements, actualites) -----
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("CATALOG_DB_PATH", str(DATA_DIR / "catalog.sqlite3")),
    }
}

# ----- Cache (compteurs de revisions du flux de changements) -----
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "vmc-catalog",
    }
}

# ----- Password validation (admin Django uniquement) -----
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# ----- Internationalization -----
LANGUAGE_CODE = "ru-ru"
TIME_ZONE = "Europe/Moscow"
USE_I18N = True
USE_TZ = True

# ----- Static / media files -----
STATIC_URL = "/static/"
STATIC_ROOT = str(BASE_DIR / "static")

MEDIA_URL = "/media/"
MEDIA_ROOT = str(DATA_DIR / "media")

# Uploads multiples d'images: on laisse passer la requete, la limite est par fichier
DATA_UPLOAD_MAX_MEMORY_SIZE = 50 * 1024 * 1024

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ----- Admin du catalogue (mot de passe partage) -----
CATALOG_ADMIN_PASSWORD = os.getenv("CATALOG_ADMIN_PASSWORD", "admin123")
ADMIN_TOKEN_HOURS = int(os.getenv("ADMIN_TOKEN_HOURS") or 12)

# ----- Images -----
IMAGE_MAX_WIDTH = int(os.getenv("IMAGE_MAX_WIDTH") or 800)
IMAGE_JPEG_QUALITY = int(os.getenv("IMAGE_JPEG_QUALITY") or 80)
IMAGE_MAX_UPLOAD_BYTES = int(os.getenv("IMAGE_MAX_UPLOAD_BYTES") or 10 * 1024 * 1024)

# ----- Documents joints aux actualites -----
DOCUMENT_MAX_UPLOAD_BYTES = int(os.getenv("DOCUMENT_MAX_UPLOAD_BYTES") or 20 * 1024 * 1024)

# ----- DRF -----
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTStatelessUserAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": ("common.permissions.IsCatalogAdminOrReadOnly",),
    "EXCEPTION_HANDLER": "common.exceptions.custom_exception_handler",
    "DEFAULT_THROTTLE_RATES": {"admin_login": "10/min"},
    "DATETIME_FORMAT": "%Y-%m-%dT%H:%M:%S%z",
}

# ----- JWT (jeton admin sans table utilisateur) -----
SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=ADMIN_TOKEN_HOURS),
    "SIGNING_KEY": SECRET_KEY,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_CLAIM": "user_id",
}

# ----- CORS / CSRF -----
CORS_ALLOW_CREDENTIALS = True

CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
CSRF_TRUSTED_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

# front public (ex vercel) via env
_CSRF_ENV = os.getenv("CSRF_TRUSTED_ORIGINS", "")
if _CSRF_ENV:
    CSRF_TRUSTED_ORIGINS = [u for u in _CSRF_ENV.split(",") if u]

# ----- Logs simples -----
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {"simple": {"format": "[%(levelname)s] %(name)s: %(message)s"}},
    "handlers": {"console": {"class": "logging.StreamHandler", "formatter": "simple"}},
    "root": {"handlers": ["console"], "level": "INFO"},
}
