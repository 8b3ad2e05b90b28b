from .base import *  # noqa

# --- Charger .env (Backend/.env) et ECRASER les variables OS si besoin -----
import os
from pathlib import Path
try:
    from dotenv import load_dotenv
    BASE_DIR = Path(__file__).resolve().parents[3]  # -> dossier Backend/ (depuis src/config/settings/local.py)
    env_path = BASE_DIR / ".env"
    # override=True pour ecraser une variable deja definie dans la session
    if env_path.exists():
        load_dotenv(env_path, override=True)
        import logging
        logger = logging.getLogger(__name__)
        logger.info(f"[settings] .env charge depuis {env_path}")
except ImportError as e:
    # pas bloquant si python-dotenv n'est pas installe
    import logging
    logger = logging.getLogger(__name__)
    logger.warning(f"[settings] Impossible de charger .env: {e}")

# --- Dev local ---
DEBUG = True
ALLOWED_HOSTS = ["127.0.0.1", "localhost", "host.docker.internal"]

# Si tu utilises Vite en dev
CSRF_TRUSTED_ORIGINS = [
    "http://127.0.0.1:5173",
    "http://localhost:5173",
]

# Ne pas re-ajouter corsheaders ici (il est deja dans base.py)

# CORS en dev
CORS_ALLOW_ALL_ORIGINS = True
CORS_ALLOW_CREDENTIALS = True

# Valeurs relues apres le .env
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", DEV_SECRET_KEY)
SIMPLE_JWT = {**SIMPLE_JWT, "SIGNING_KEY": SECRET_KEY}
CATALOG_ADMIN_PASSWORD = os.getenv("CATALOG_ADMIN_PASSWORD", "admin123")
FIXTURES_DIR = Path(os.getenv("CATALOG_FIXTURES_DIR", str(DATA_DIR / "fixtures")))

# Pas de throttling agressif sur le login en dev
REST_FRAMEWORK.update({
    "DEFAULT_THROTTLE_RATES": {"admin_login": "100/min"},
})
