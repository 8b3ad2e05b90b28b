"""
Compression des images envoyees par l'admin.

L'image est redimensionnee (largeur <= IMAGE_MAX_WIDTH, jamais agrandie),
re-encodee en JPEG puis renvoyee sous forme de data URL, stockee telle quelle
dans la fiche.
"""
from __future__ import annotations

import base64
import io
import logging
from typing import Iterable, List, Optional, Tuple

from django.conf import settings
from PIL import Image, ImageOps, UnidentifiedImageError

from .exceptions import ImageRejected

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = "data:image/jpeg;base64,"


def validate_image_upload(upload) -> None:
    """Controle cote serveur: type MIME image/* et taille maximale."""
    name = getattr(upload, "name", "fichier")
    content_type = (getattr(upload, "content_type", "") or "").lower()
    if not content_type.startswith("image/"):
        raise ImageRejected(f"Le fichier {name} n'est pas une image.")

    limit = settings.IMAGE_MAX_UPLOAD_BYTES
    if upload.size > limit:
        raise ImageRejected(
            f"Le fichier {name} est trop volumineux. Taille maximale: {limit // (1024 * 1024)} Mo"
        )


def _flatten(img: Image.Image) -> Image.Image:
    # JPEG n'a pas de canal alpha: on compose sur fond blanc
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def compress_image(upload, max_width: Optional[int] = None, quality: Optional[int] = None) -> str:
    """Redimensionne + re-encode en JPEG, retourne une data URL."""
    max_width = max_width or settings.IMAGE_MAX_WIDTH
    quality = quality or settings.IMAGE_JPEG_QUALITY

    if hasattr(upload, "seek"):
        upload.seek(0)
    try:
        with Image.open(upload) as source:
            source.load()
            # orientation EXIF appliquee: l'image telle qu'affichee par le navigateur
            img = _flatten(ImageOps.exif_transpose(source))
            if img.width > max_width:
                height = max(1, round(img.height * max_width / img.width))
                img = img.resize((max_width, height), Image.Resampling.LANCZOS)
            buf = io.BytesIO()
            img.save(buf, format="JPEG", quality=quality, optimize=True)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise ImageRejected("Erreur de chargement de l'image.") from exc

    return DATA_URL_PREFIX + base64.b64encode(buf.getvalue()).decode("ascii")


def process_image_upload(upload) -> str:
    validate_image_upload(upload)
    data_url = compress_image(upload)
    logger.info(
        "Image %s compressee de %.2fKB a %.2fKB",
        getattr(upload, "name", "?"), upload.size / 1024, len(data_url) / 1024,
    )
    return data_url


def process_image_uploads(uploads: Iterable) -> Tuple[List[str], List[dict]]:
    """
    Traite un lot de fichiers. Un fichier refuse n'empeche pas les autres:
    retourne (data_urls acceptees, [{"file", "detail"}] refusees).
    """
    accepted: List[str] = []
    rejected: List[dict] = []
    for upload in uploads:
        try:
            accepted.append(process_image_upload(upload))
        except ImageRejected as exc:
            logger.warning("Image refusee (%s): %s", getattr(upload, "name", "?"), exc.detail)
            rejected.append({"file": getattr(upload, "name", ""), "detail": str(exc.detail)})
    return accepted, rejected
