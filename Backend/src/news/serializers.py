from rest_framework import serializers

from .models import News, document_type_for


class DocumentField(serializers.Field):
    """
    document: {"name", "url", "type"} <-> document_name / document_url / document_type.
    null efface la piece jointe.
    """

    def __init__(self, **kwargs):
        kwargs["source"] = "*"
        kwargs.setdefault("required", False)
        super().__init__(**kwargs)

    def to_representation(self, instance):
        if not instance.document_url:
            return None
        return {
            "name": instance.document_name,
            "url": instance.document_url,
            "type": instance.document_type or document_type_for(instance.document_name),
        }

    def validate_empty_values(self, data):
        if data is None:
            return (False, data)
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        if data is None:
            return {"document_name": "", "document_url": "", "document_type": ""}
        if not isinstance(data, dict):
            raise serializers.ValidationError("Objet {name, url, type} attendu.")

        url = str(data.get("url") or "").strip()
        if not url:
            raise serializers.ValidationError({"url": "Lien du document requis."})
        name = str(data.get("name") or url.rsplit("/", 1)[-1]).strip()

        doc_type = data.get("type") or document_type_for(name)
        if doc_type not in News.DocumentType.values:
            raise serializers.ValidationError({"type": f"Type inconnu: {doc_type}"})
        return {"document_name": name[:255], "document_url": url[:500], "document_type": doc_type}


class NewsSerializer(serializers.ModelSerializer):
    document = DocumentField()
    publishDate = serializers.DateTimeField(source="publish_date", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    order = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    class Meta:
        model = News
        fields = [
            "id",
            "title",
            "content",
            "excerpt",
            "image",
            "document",
            "category",
            "featured",
            "published",
            "publishDate",
            "createdAt",
            "updatedAt",
            "order",
        ]
        read_only_fields = ["id"]

