from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand

from catalog.services.fixtures import export_file
from common.utils import COLLECTIONS


class Command(BaseCommand):
    help = "Exporte les collections en JSON (le fichier precedent est garde en .backup.json)."

    def add_arguments(self, parser):
        parser.add_argument("--dir", type=str, default=None, help="Dossier cible")
        parser.add_argument("--only", choices=COLLECTIONS, help="Une seule collection")

    def handle(self, *args, **opts):
        directory = Path(opts["dir"] or settings.FIXTURES_DIR)
        collections = [opts["only"]] if opts["only"] else list(COLLECTIONS)

        for collection in collections:
            path = export_file(collection, directory)
            self.stdout.write(self.style.SUCCESS(f"{collection} -> {path}"))
