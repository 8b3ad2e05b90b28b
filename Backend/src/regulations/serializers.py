from rest_framework import serializers

from common.utils import dict_without_none
from .models import Regulation


class DownloadLinksField(serializers.Field):
    """
    downloadLinks: {"pdf": url?, "word": url?} <-> download_pdf / download_word.
    Champ source="*": la valeur interne est fusionnee dans validated_data.
    """

    def __init__(self, **kwargs):
        kwargs["source"] = "*"
        kwargs.setdefault("required", False)
        super().__init__(**kwargs)
        self._url = serializers.URLField(max_length=500, allow_blank=True)

    def to_representation(self, instance):
        links = dict_without_none({
            "pdf": instance.download_pdf or None,
            "word": instance.download_word or None,
        })
        return links or None

    def validate_empty_values(self, data):
        # null = effacer les deux liens (traite dans to_internal_value)
        if data is None:
            return (False, data)
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        if data is None:
            return {"download_pdf": "", "download_word": ""}
        if not isinstance(data, dict):
            raise serializers.ValidationError("Objet {pdf, word} attendu.")
        return {
            "download_pdf": self._url.run_validation(data.get("pdf") or ""),
            "download_word": self._url.run_validation(data.get("word") or ""),
        }


class RegulationSerializer(serializers.ModelSerializer):
    downloadLinks = DownloadLinksField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    order = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    class Meta:
        model = Regulation
        fields = [
            "id",
            "title",
            "description",
            "category",
            "content",
            "screenshot",
            "downloadLinks",
            "createdAt",
            "updatedAt",
            "order",
        ]
        read_only_fields = ["id"]
