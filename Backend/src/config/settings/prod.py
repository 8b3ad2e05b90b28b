from django.core.exceptions import ImproperlyConfigured

from .base import *

# Production
DEBUG = False

# IMPORTANT: definir DJANGO_ALLOWED_HOSTS via variables d'env
# Exemple: export DJANGO_ALLOWED_HOSTS="catalog.example.com"
ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if h] or ["*"]

# CORS: restreindre aux domaines du frontend en prod
CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = [u for u in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",") if u]

# Pas de mot de passe admin par defaut en prod
CATALOG_ADMIN_PASSWORD = os.getenv("CATALOG_ADMIN_PASSWORD", "")
if not CATALOG_ADMIN_PASSWORD:
    raise ImproperlyConfigured("CATALOG_ADMIN_PASSWORD doit etre defini en production.")

# Le jeton admin est signe avec SECRET_KEY: la cle de dev permettrait d'en forger un
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "")
if not SECRET_KEY or SECRET_KEY == DEV_SECRET_KEY:
    raise ImproperlyConfigured("DJANGO_SECRET_KEY doit etre defini (et different de la cle de dev) en production.")
SIMPLE_JWT = {**SIMPLE_JWT, "SIGNING_KEY": SECRET_KEY}

# Revisions du flux de changements partagees entre workers et conservees au redemarrage
# (table creee par: python manage.py createcachetable)
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.db.DatabaseCache",
        "LOCATION": os.getenv("CATALOG_CACHE_TABLE", "vmc_cache"),
    }
}

# Securite HTTP
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True
SECURE_SSL_REDIRECT = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

# Logs simples vers stdout
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {"simple": {"format": "[%(levelname)s] %(name)s: %(message)s"}},
    "handlers": {"console": {"class": "logging.StreamHandler", "formatter": "simple"}},
    "root": {"handlers": ["console"], "level": "INFO"},
}
