from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from catalog.services.fixtures import FixtureError, load_file
from common.utils import COLLECTIONS


class Command(BaseCommand):
    help = "Importe models.json, regulations.json et news.json dans la base (collections vides seulement)."

    def add_arguments(self, parser):
        parser.add_argument("--dir", type=str, default=None, help="Dossier des fichiers JSON")
        parser.add_argument("--only", choices=COLLECTIONS, help="Une seule collection")
        parser.add_argument("--force", action="store_true", help="Remplace les donnees existantes")

    def handle(self, *args, **opts):
        directory = Path(opts["dir"] or settings.FIXTURES_DIR)
        collections = [opts["only"]] if opts["only"] else list(COLLECTIONS)

        self.stdout.write(self.style.NOTICE(f"Import depuis {directory}"))

        for collection in collections:
            path = directory / f"{collection}.json"
            if not path.exists():
                self.stdout.write(self.style.WARNING(f"{path.name} absent, ignore"))
                continue
            try:
                count = load_file(collection, directory, force=opts["force"])
            except FixtureError as e:
                raise CommandError(str(e)) from e

            if count:
                self.stdout.write(self.style.SUCCESS(f"{collection}: {count} enregistrements importes"))
            else:
                self.stdout.write(f"{collection}: deja des donnees (utiliser --force pour remplacer)")
