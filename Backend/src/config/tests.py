import importlib
import sys

import pytest
from django.core.exceptions import ImproperlyConfigured


def _load_settings(monkeypatch, name):
    """Re-execute un module de settings (et base) avec l'environnement courant."""
    for module in ("config.settings.base", name):
        monkeypatch.delitem(sys.modules, module, raising=False)
    return importlib.import_module(name)


@pytest.fixture
def prod_env(monkeypatch, tmp_path):
    monkeypatch.setenv("CATALOG_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("CATALOG_ADMIN_PASSWORD", "s3cret-admin")
    monkeypatch.setenv("DJANGO_SECRET_KEY", "une-vraie-cle-de-production")
    return monkeypatch


def test_prod_refuses_missing_secret_key(prod_env):
    prod_env.delenv("DJANGO_SECRET_KEY")
    with pytest.raises(ImproperlyConfigured):
        _load_settings(prod_env, "config.settings.prod")


def test_prod_refuses_dev_secret_key(prod_env):
    prod_env.setenv("DJANGO_SECRET_KEY", "dev_only_change_me")
    with pytest.raises(ImproperlyConfigured):
        _load_settings(prod_env, "config.settings.prod")


def test_prod_refuses_missing_admin_password(prod_env):
    prod_env.delenv("CATALOG_ADMIN_PASSWORD")
    with pytest.raises(ImproperlyConfigured):
        _load_settings(prod_env, "config.settings.prod")


def test_prod_signs_tokens_with_configured_key_and_shares_cache(prod_env):
    prod = _load_settings(prod_env, "config.settings.prod")
    assert prod.SIMPLE_JWT["SIGNING_KEY"] == "une-vraie-cle-de-production"
    assert prod.CACHES["default"]["BACKEND"] == "django.core.cache.backends.db.DatabaseCache"


def test_importing_settings_does_not_touch_the_filesystem(monkeypatch, tmp_path):
    data_dir = tmp_path / "absent"
    monkeypatch.setenv("CATALOG_DATA_DIR", str(data_dir))
    base = _load_settings(monkeypatch, "config.settings.base")
    assert base.DATA_DIR == data_dir
    assert not data_dir.exists()


def test_ensure_data_dir_creates_it(settings, tmp_path):
    from common.utils import ensure_data_dir

    settings.DATA_DIR = tmp_path / "nested" / "data"
    assert ensure_data_dir().is_dir()
