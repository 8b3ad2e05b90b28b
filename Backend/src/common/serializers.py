from rest_framework import serializers

from .ordering import DIRECTIONS


class MoveSerializer(serializers.Serializer):
    direction = serializers.ChoiceField(choices=DIRECTIONS)


class OrderSerializer(serializers.Serializer):
    order = serializers.IntegerField(min_value=0)


class ReorderSerializer(serializers.Serializer):
    """ids absent -> renumerotation de l'ordre courant."""

    ids = serializers.ListField(child=serializers.CharField(), required=False, allow_empty=False)
