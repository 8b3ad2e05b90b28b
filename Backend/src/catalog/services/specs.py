"""
Lecture du tableau de caracteristiques (2 colonnes: nom | valeur).

Sources acceptees:
- texte colle depuis Excel (tabulation, point-virgule ou virgule)
- fichier .csv (meme regles que le texte colle)
- fichier .xlsx / .xls (premiere feuille, premiere ligne = en-tete)
"""
from __future__ import annotations

import csv
import io
import logging
import re
from typing import Dict, Optional

import pandas as pd

from common.exceptions import SpecsParseError

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\t;,]")
_QUOTES = re.compile(r"['\"]")

SPREADSHEET_EXTENSIONS = ("xlsx", "xls")
TEXT_EXTENSIONS = ("csv",)
CSV_HEADER = ("Название характеристики", "Значение")


def parse_pasted_specs(text: str) -> Dict[str, str]:
    """
    Une paire par ligne: les deux premiers champs, tous deux non vides.
    Pas d'echappement: les guillemets sont simplement retires.
    """
    specs: Dict[str, str] = {}
    for line in (text or "").strip().split("\n"):
        parts = [_QUOTES.sub("", part.strip()) for part in _SEPARATORS.split(line)]
        if len(parts) >= 2 and parts[0] and parts[1]:
            specs[parts[0]] = parts[1]
    return specs


def _cell(value) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def parse_spreadsheet(data: bytes) -> Dict[str, str]:
    """Premiere feuille; la ligne 0 (en-tete) et les lignes incompletes sont ignorees."""
    df = pd.read_excel(io.BytesIO(data), sheet_name=0, header=None, dtype=str)

    specs: Dict[str, str] = {}
    for index, row in enumerate(df.itertuples(index=False, name=None)):
        if index == 0 or len(row) < 2:
            continue
        key, value = _cell(row[0]), _cell(row[1])
        if key and value:
            specs[key] = value
    return specs


def _decode_text(data: bytes) -> str:
    for encoding in ("utf-8-sig", "cp1251"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise SpecsParseError("Encodage du fichier non reconnu (UTF-8 ou Windows-1251 attendu).")


def parse_specs_upload(upload) -> Dict[str, str]:
    name = (getattr(upload, "name", "") or "").lower()
    ext = name.rsplit(".", 1)[-1] if "." in name else ""
    data = upload.read()

    if ext in TEXT_EXTENSIONS:
        return parse_pasted_specs(_decode_text(data))

    if ext in SPREADSHEET_EXTENSIONS:
        try:
            return parse_spreadsheet(data)
        except Exception as e:
            logger.exception("parse_spreadsheet: lecture impossible (%s)", name)
            raise SpecsParseError("Erreur de lecture du fichier. Verifiez le format des donnees.") from e

    raise SpecsParseError("Formats supportes: .xlsx, .xls, .csv")


def extract_specs(text: Optional[str] = None, upload=None) -> Dict[str, str]:
    """Point d'entree des vues: texte colle OU fichier; au moins une paire attendue."""
    if upload is not None:
        specs = parse_specs_upload(upload)
    elif text and text.strip():
        specs = parse_pasted_specs(text)
    else:
        raise SpecsParseError("Champ 'text' ou 'file' requis.")

    if not specs:
        raise SpecsParseError("Aucune caracteristique reconnue. Verifiez le format des donnees.")
    return specs


def specs_to_csv(specs: Dict[str, str]) -> str:
    """Export CSV: en-tete puis une ligne entre guillemets par caracteristique."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for key, value in specs.items():
        writer.writerow([key, value])
    return buf.getvalue()
