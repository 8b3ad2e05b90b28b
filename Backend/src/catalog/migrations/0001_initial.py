import catalog.models
import django.db.models.expressions
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MotorcycleModel",
            fields=[
                ("order", models.PositiveIntegerField(blank=True, db_index=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.CharField(default=catalog.models.new_model_id, max_length=64, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                ("images", models.JSONField(blank=True, default=list)),
                ("specifications", models.JSONField(blank=True, default=dict)),
                ("yandex_disk_link", models.URLField(blank=True, default="", max_length=500)),
                ("video_frame", models.TextField(blank=True, default="")),
            ],
            options={
                "verbose_name": "Modele",
                "verbose_name_plural": "Modeles",
                "db_table": "vmc_models",
                "ordering": [
                    django.db.models.expressions.OrderBy(django.db.models.expressions.F("order"), nulls_last=True),
                    "-created_at",
                ],
                "abstract": False,
            },
        ),
    ]
