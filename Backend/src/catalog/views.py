import logging

from django.db import DatabaseError
from django.db.models import Q
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils.http import content_disposition_header
from rest_framework import generics, status
from rest_framework.exceptions import NotFound
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from common import ordering
from common.exceptions import ImageRejected, SpecsParseError, UserFacingAPIException
from common.images import process_image_uploads
from common.serializers import MoveSerializer, OrderSerializer, ReorderSerializer
from .models import MotorcycleModel
from .serializers import MotorcycleModelSerializer
from .services import extract_specs, specs_to_csv

logger = logging.getLogger(__name__)


class ModelListCreateView(generics.ListCreateAPIView):
    """
    GET  /api/catalog/models/?q=... -> liste (ordre d'affichage), recherche nom/description
    POST /api/catalog/models/       -> creation (admin)
    """

    serializer_class = MotorcycleModelSerializer

    def get_queryset(self):
        qs = MotorcycleModel.objects.all()
        q = (self.request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(Q(name__icontains=q) | Q(description__icontains=q))
        return qs

    def list(self, request, *args, **kwargs):
        try:
            return super().list(request, *args, **kwargs)
        except DatabaseError:
            # liste vide plutot qu'une page cassee
            logger.exception("models list: lecture impossible")
            return Response([])

    def perform_create(self, serializer):
        order = serializer.validated_data.get("order")
        instance = serializer.save(order=order if order is not None else ordering.next_order(MotorcycleModel))
        logger.info("Modele cree: %s (%s)", instance.name, instance.pk)


class ModelDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = MotorcycleModelSerializer
    queryset = MotorcycleModel.objects.all()

    def perform_update(self, serializer):
        instance = serializer.save()
        logger.info("Modele mis a jour: %s (%s)", instance.name, instance.pk)

    def perform_destroy(self, instance):
        logger.info("Modele supprime: %s (%s)", instance.name, instance.pk)
        instance.delete()


def _order_payload(items):
    return {"success": True, "items": [{"id": item.pk, "order": item.order} for item in items]}


class ModelMoveView(APIView):
    """POST /api/catalog/models/<id>/move/ {"direction": "up"|"down"}"""

    def post(self, request, pk: str):
        serializer = MoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        moved = ordering.move(MotorcycleModel, pk, serializer.validated_data["direction"])
        return Response(_order_payload(moved))


class ModelOrderView(APIView):
    """POST /api/catalog/models/<id>/order/ {"order": 3}"""

    def post(self, request, pk: str):
        serializer = OrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = ordering.set_order(MotorcycleModel, pk, serializer.validated_data["order"])
        return Response(_order_payload([item]))


class ModelReorderView(APIView):
    """POST /api/catalog/models/reorder/ {"ids": [...]} (sans ids: renumerotation 1..n)"""

    def post(self, request):
        serializer = ReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        items = ordering.reorder(MotorcycleModel, serializer.validated_data.get("ids"))
        return Response(_order_payload(items))


class ModelImagesView(APIView):
    """
    POST /api/catalog/models/<id>/images/ (multipart, champ 'images' repete)
    Chaque fichier est controle puis compresse; les refus n'annulent pas les autres.
    """

    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, pk: str):
        model = get_object_or_404(MotorcycleModel, pk=pk)
        uploads = request.FILES.getlist("images")
        if not uploads:
            raise UserFacingAPIException("Champ 'images' requis.")

        accepted, rejected = process_image_uploads(uploads)
        if not accepted:
            raise ImageRejected({"rejected": rejected})

        model.images = list(model.images or []) + accepted
        model.save(update_fields=["images", "updated_at"])
        return Response(
            {"images": model.images, "added": len(accepted), "rejected": rejected},
            status=status.HTTP_201_CREATED,
        )


class ModelImageDeleteView(APIView):
    """DELETE /api/catalog/models/<id>/images/<index>/"""

    def delete(self, request, pk: str, index: int):
        model = get_object_or_404(MotorcycleModel, pk=pk)
        images = list(model.images or [])
        if index >= len(images):
            raise NotFound(f"Image {index} introuvable.")
        images.pop(index)
        model.images = images
        model.save(update_fields=["images", "updated_at"])
        return Response({"images": images})


class SpecsParseView(APIView):
    """
    POST /api/catalog/specs/parse  ('text' colle ou 'file' .csv/.xlsx/.xls)
    Ne touche a aucune fiche: renvoie seulement le tableau reconnu.
    """

    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def post(self, request):
        specs = extract_specs(text=request.data.get("text"), upload=request.FILES.get("file"))
        return Response({"specifications": specs, "count": len(specs)})


class ModelSpecsImportView(APIView):
    """POST /api/catalog/models/<id>/specs/import -> fusion dans le tableau existant."""

    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def post(self, request, pk: str):
        model = get_object_or_404(MotorcycleModel, pk=pk)
        specs = extract_specs(text=request.data.get("text"), upload=request.FILES.get("file"))

        model.specifications = {**(model.specifications or {}), **specs}
        model.save(update_fields=["specifications", "updated_at"])
        logger.info("%d caracteristiques importees dans %s", len(specs), model.pk)
        return Response({
            "count": len(specs),
            "model": MotorcycleModelSerializer(model).data,
        })


class ModelSpecsExportView(APIView):
    """GET /api/catalog/models/<id>/specs/export -> fichier CSV"""

    def get(self, request, pk: str):
        model = get_object_or_404(MotorcycleModel, pk=pk)
        if not model.specifications:
            raise SpecsParseError("Aucune caracteristique a exporter.")

        response = HttpResponse(specs_to_csv(model.specifications), content_type="text/csv; charset=utf-8")
        filename = f"{model.name or 'модель'}_характеристики.csv"
        response.headers["Content-Disposition"] = content_disposition_header(True, filename)
        return response
