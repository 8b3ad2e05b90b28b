import django.db.models.expressions
import django.utils.timezone
import news.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="News",
            fields=[
                ("order", models.PositiveIntegerField(blank=True, db_index=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.CharField(default=news.models.new_news_id, max_length=64, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=300)),
                ("content", models.TextField(blank=True, default="")),
                ("excerpt", models.TextField(blank=True, default="")),
                ("image", models.TextField(blank=True, default="")),
                ("document_name", models.CharField(blank=True, default="", max_length=255)),
                ("document_url", models.CharField(blank=True, default="", max_length=500)),
                (
                    "document_type",
                    models.CharField(
                        blank=True,
                        choices=[("pdf", "PDF"), ("doc", "DOC"), ("docx", "DOCX"), ("other", "Autre")],
                        default="",
                        max_length=8,
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("company", "Компания"),
                            ("products", "Продукция"),
                            ("events", "События"),
                            ("maintenance", "Обслуживание"),
                            ("other", "Другое"),
                        ],
                        default="company",
                        max_length=32,
                    ),
                ),
                ("featured", models.BooleanField(default=False)),
                ("published", models.BooleanField(db_index=True, default=True)),
                ("publish_date", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "verbose_name": "Actualite",
                "verbose_name_plural": "Actualites",
                "db_table": "vmc_news",
                "ordering": [
                    django.db.models.expressions.OrderBy(django.db.models.expressions.F("order"), nulls_last=True),
                    "-created_at",
                ],
                "abstract": False,
            },
        ),
    ]
