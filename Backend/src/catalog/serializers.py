from rest_framework import serializers

from .models import MotorcycleModel


class MotorcycleModelSerializer(serializers.ModelSerializer):
    """Fiche modele, champs exposes en camelCase comme l'ancien front."""

    images = serializers.ListField(child=serializers.CharField(), required=False)
    specifications = serializers.DictField(child=serializers.CharField(allow_blank=True), required=False)
    yandexDiskLink = serializers.URLField(
        source="yandex_disk_link", max_length=500, required=False, allow_blank=True
    )
    videoFrame = serializers.CharField(
        source="video_frame", required=False, allow_blank=True, trim_whitespace=False
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    order = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    class Meta:
        model = MotorcycleModel
        fields = [
            "id",
            "name",
            "description",
            "images",
            "specifications",
            "yandexDiskLink",
            "videoFrame",
            "createdAt",
            "updatedAt",
            "order",
        ]
        read_only_fields = ["id"]

    def validate_specifications(self, value):
        cleaned = {}
        for key, val in value.items():
            key = str(key).strip()
            if not key:
                raise serializers.ValidationError("Nom de caracteristique vide.")
            cleaned[key] = val.strip()
        return cleaned
