"""
Point d'entree WSGI du catalogue (gunicorn / uvicorn).
Par defaut on sert les settings de production; surcharger DJANGO_SETTINGS_MODULE sinon.
"""
import os

# Charger les variables d'environnement depuis .env (si present)
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

from django.core.wsgi import get_wsgi_application

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE",
    os.getenv("DJANGO_SETTINGS_MODULE", "config.settings.prod"),
)

application = get_wsgi_application()

from common.utils import ensure_data_dir  # noqa: E402

ensure_data_dir()
