import logging

from django.db import DatabaseError
from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import generics
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from common import ordering
from common.exceptions import UserFacingAPIException
from common.images import process_image_upload
from common.serializers import MoveSerializer, ReorderSerializer
from .models import Regulation
from .serializers import RegulationSerializer

logger = logging.getLogger(__name__)

# Fiche affichee quand la base ne repond pas
UNAVAILABLE_PLACEHOLDER = {
    "id": "reg-fallback-1",
    "title": "Система регламентов временно недоступна",
    "description": "Пожалуйста, попробуйте позже",
    "category": "system",
    "content": "## Система временно недоступна\n\nПожалуйста, попробуйте позже или обратитесь к администратору.",
    "screenshot": "",
    "downloadLinks": None,
    "createdAt": None,
    "updatedAt": None,
    "order": 1,
}


class RegulationListCreateView(generics.ListCreateAPIView):
    """
    GET  /api/regulations/?category=...&q=...
    POST /api/regulations/ (admin)
    """

    serializer_class = RegulationSerializer

    def get_queryset(self):
        qs = Regulation.objects.all()
        category = (self.request.query_params.get("category") or "").strip()
        if category:
            qs = qs.filter(category=category)
        q = (self.request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(Q(title__icontains=q) | Q(description__icontains=q) | Q(content__icontains=q))
        return qs

    def list(self, request, *args, **kwargs):
        try:
            return super().list(request, *args, **kwargs)
        except DatabaseError:
            logger.exception("regulations list: lecture impossible, fiche de secours")
            return Response([UNAVAILABLE_PLACEHOLDER])

    def perform_create(self, serializer):
        order = serializer.validated_data.get("order")
        instance = serializer.save(order=order if order is not None else ordering.next_order(Regulation))
        logger.info("Reglement cree: %s (%s)", instance.title, instance.pk)


class RegulationDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = RegulationSerializer
    queryset = Regulation.objects.all()

    def perform_destroy(self, instance):
        logger.info("Reglement supprime: %s", instance.pk)
        instance.delete()


class RegulationCategoriesView(APIView):
    """GET /api/regulations/categories/ -> categories utilisees + libelles."""

    def get(self, request):
        used = (
            Regulation.objects.order_by("category")
            .values_list("category", flat=True)
            .distinct()
        )
        return Response({
            "categories": list(used),
            "labels": dict(Regulation.Category.choices),
        })


class RegulationMoveView(APIView):
    def post(self, request, pk: str):
        serializer = MoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        moved = ordering.move(Regulation, pk, serializer.validated_data["direction"])
        return Response({"success": True, "items": [{"id": r.pk, "order": r.order} for r in moved]})


class RegulationReorderView(APIView):
    def post(self, request):
        serializer = ReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        items = ordering.reorder(Regulation, serializer.validated_data.get("ids"))
        return Response({"success": True, "items": [{"id": r.pk, "order": r.order} for r in items]})


class RegulationScreenshotView(APIView):
    """POST /api/regulations/<id>/screenshot/ (multipart, champ 'file')"""

    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, pk: str):
        regulation = get_object_or_404(Regulation, pk=pk)
        upload = request.FILES.get("file")
        if upload is None:
            raise UserFacingAPIException("Champ 'file' requis.")

        regulation.screenshot = process_image_upload(upload)
        regulation.save(update_fields=["screenshot", "updated_at"])
        return Response(RegulationSerializer(regulation).data)
