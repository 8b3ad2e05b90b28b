#!/usr/bin/env python
"""Utilitaire en ligne de commande Django pour le catalogue."""
import os
import sys


def main():
    # Charger .env si present
    try:
        from dotenv import load_dotenv
        load_dotenv()
    except ImportError:
        pass

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.local")
    from django.core.management import execute_from_command_line
    from common.utils import ensure_data_dir

    ensure_data_dir()

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
