import django.db.models.expressions
import django.utils.timezone
import regulations.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Regulation",
            fields=[
                ("order", models.PositiveIntegerField(blank=True, db_index=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.CharField(default=regulations.models.new_regulation_id, max_length=64, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=300)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("maintenance", "Техобслуживание"),
                            ("operation", "Эксплуатация"),
                            ("safety", "Безопасность"),
                            ("warranty", "Гарантия"),
                            ("technical", "Технические"),
                        ],
                        default="maintenance",
                        max_length=32,
                    ),
                ),
                ("content", models.TextField(blank=True, default="")),
                ("screenshot", models.TextField(blank=True, default="")),
                ("download_pdf", models.URLField(blank=True, default="", max_length=500)),
                ("download_word", models.URLField(blank=True, default="", max_length=500)),
            ],
            options={
                "verbose_name": "Reglement",
                "verbose_name_plural": "Reglements",
                "db_table": "vmc_regulations",
                "ordering": [
                    django.db.models.expressions.OrderBy(django.db.models.expressions.F("order"), nulls_last=True),
                    "-created_at",
                ],
                "abstract": False,
            },
        ),
    ]
