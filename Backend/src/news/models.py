from django.db import models
from django.utils import timezone

from common.models import OrderedRecord
from common.utils import new_id


def new_news_id() -> str:
    return new_id("news")


class News(OrderedRecord):
    """
    Actualite de l'entreprise.

    - featured: mise en avant sur la page d'accueil
    - published: invisible du public tant que False
    - document_*: piece jointe (nom / url / type)
    """

    class Category(models.TextChoices):
        COMPANY = "company", "Компания"
        PRODUCTS = "products", "Продукция"
        EVENTS = "events", "События"
        MAINTENANCE = "maintenance", "Обслуживание"
        OTHER = "other", "Другое"

    class DocumentType(models.TextChoices):
        PDF = "pdf", "PDF"
        DOC = "doc", "DOC"
        DOCX = "docx", "DOCX"
        OTHER = "other", "Autre"

    id = models.CharField(primary_key=True, max_length=64, default=new_news_id)
    title = models.CharField(max_length=300)
    content = models.TextField(blank=True, default="")
    excerpt = models.TextField(blank=True, default="")
    image = models.TextField(blank=True, default="")
    document_name = models.CharField(max_length=255, blank=True, default="")
    document_url = models.CharField(max_length=500, blank=True, default="")
    document_type = models.CharField(max_length=8, choices=DocumentType.choices, blank=True, default="")
    category = models.CharField(max_length=32, choices=Category.choices, default=Category.COMPANY)
    featured = models.BooleanField(default=False)
    published = models.BooleanField(default=True, db_index=True)
    publish_date = models.DateTimeField(default=timezone.now)

    class Meta(OrderedRecord.Meta):
        db_table = "vmc_news"
        verbose_name = "Actualite"
        verbose_name_plural = "Actualites"

    def __str__(self) -> str:
        return self.title


def document_type_for(filename: str) -> str:
    """pdf / doc / docx d'apres l'extension, sinon other."""
    ext = (filename or "").rsplit(".", 1)[-1].lower() if "." in (filename or "") else ""
    if ext in (News.DocumentType.PDF, News.DocumentType.DOC, News.DocumentType.DOCX):
        return ext
    return News.DocumentType.OTHER
