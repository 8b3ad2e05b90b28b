import logging
import os

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from rest_framework import generics
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from common import ordering
from common.exceptions import UserFacingAPIException
from common.images import process_image_upload
from common.permissions import is_admin_token
from common.serializers import MoveSerializer, ReorderSerializer
from .models import News, document_type_for
from .serializers import NewsSerializer

logger = logging.getLogger(__name__)

UNAVAILABLE_PLACEHOLDER = {
    "id": "news-fallback-1",
    "title": "Новости временно недоступны",
    "content": "Пожалуйста, попробуйте позже.",
    "excerpt": "Пожалуйста, попробуйте позже.",
    "image": "",
    "document": None,
    "category": "company",
    "featured": False,
    "published": True,
    "publishDate": None,
    "createdAt": None,
    "updatedAt": None,
    "order": 1,
}


def visible_news(request):
    """Le public ne voit que les actualites publiees."""
    qs = News.objects.all()
    if not is_admin_token(request.auth):
        qs = qs.filter(published=True)
    return qs


class NewsListCreateView(generics.ListCreateAPIView):
    """
    GET  /api/news/?category=...&featured=1&published=0|1 (published: admin seulement)
    POST /api/news/ (admin)
    """

    serializer_class = NewsSerializer

    def get_queryset(self):
        qs = visible_news(self.request)
        params = self.request.query_params

        published = params.get("published")
        if published in ("0", "1") and is_admin_token(self.request.auth):
            qs = qs.filter(published=published == "1")
        category = (params.get("category") or "").strip()
        if category:
            qs = qs.filter(category=category)
        if params.get("featured") == "1":
            qs = qs.filter(featured=True)
        return qs

    def list(self, request, *args, **kwargs):
        try:
            return super().list(request, *args, **kwargs)
        except DatabaseError:
            logger.exception("news list: lecture impossible, fiche de secours")
            return Response([UNAVAILABLE_PLACEHOLDER])

    def perform_create(self, serializer):
        order = serializer.validated_data.get("order")
        instance = serializer.save(order=order if order is not None else ordering.next_order(News))
        logger.info("Actualite creee: %s (%s)", instance.title, instance.pk)


class FeaturedNewsView(generics.ListAPIView):
    serializer_class = NewsSerializer

    def get_queryset(self):
        return News.objects.filter(published=True, featured=True)


class NewsDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = NewsSerializer

    def get_queryset(self):
        return visible_news(self.request)

    def perform_destroy(self, instance):
        logger.info("Actualite supprimee: %s", instance.pk)
        instance.delete()


class NewsToggleFeaturedView(APIView):
    def post(self, request, pk: str):
        news = get_object_or_404(News, pk=pk)
        news.featured = not news.featured
        news.save(update_fields=["featured", "updated_at"])
        return Response(NewsSerializer(news).data)


class NewsMoveView(APIView):
    def post(self, request, pk: str):
        serializer = MoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        moved = ordering.move(News, pk, serializer.validated_data["direction"])
        return Response({"success": True, "items": [{"id": n.pk, "order": n.order} for n in moved]})


class NewsReorderView(APIView):
    def post(self, request):
        serializer = ReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        items = ordering.reorder(News, serializer.validated_data.get("ids"))
        return Response({"success": True, "items": [{"id": n.pk, "order": n.order} for n in items]})


class NewsImageView(APIView):
    """POST /api/news/<id>/image/ (multipart, champ 'file')"""

    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, pk: str):
        news = get_object_or_404(News, pk=pk)
        upload = request.FILES.get("file")
        if upload is None:
            raise UserFacingAPIException("Champ 'file' requis.")

        news.image = process_image_upload(upload)
        news.save(update_fields=["image", "updated_at"])
        return Response(NewsSerializer(news).data)


class NewsDocumentView(APIView):
    """
    POST /api/news/<id>/document/ (multipart, champ 'file')
    Le fichier est range dans le stockage par defaut (MEDIA_ROOT/news/documents).
    """

    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, pk: str):
        news = get_object_or_404(News, pk=pk)
        upload = request.FILES.get("file")
        if upload is None:
            raise UserFacingAPIException("Champ 'file' requis.")

        limit = settings.DOCUMENT_MAX_UPLOAD_BYTES
        if upload.size > limit:
            raise UserFacingAPIException(
                f"Le fichier {upload.name} est trop volumineux. Taille maximale: {limit // (1024 * 1024)} Mo"
            )

        name = os.path.basename(upload.name)
        stored = default_storage.save(f"news/documents/{news.pk}/{name}", upload)
        news.document_name = name
        news.document_url = default_storage.url(stored)
        news.document_type = document_type_for(name)
        news.save(update_fields=["document_name", "document_url", "document_type", "updated_at"])
        logger.info("Document %s joint a %s", stored, news.pk)
        return Response(NewsSerializer(news).data)
