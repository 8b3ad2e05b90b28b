import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from news.models import News, document_type_for


@pytest.fixture
def feed():
    return {
        "live": News.objects.create(title="Новый дилер", category="company", order=1),
        "draft": News.objects.create(title="Черновик", published=False, order=2),
        "star": News.objects.create(title="Новая модель", category="products", featured=True, order=3),
    }


def _titles(response):
    return [n["title"] for n in response.data]


@pytest.mark.django_db
def test_public_sees_published_only(api_client, feed):
    r = api_client.get(reverse("news_list"))
    assert _titles(r) == ["Новый дилер", "Новая модель"]

    # le filtre published est ignore pour le public
    r = api_client.get(reverse("news_list"), {"published": "0"})
    assert _titles(r) == ["Новый дилер", "Новая модель"]

    r = api_client.get(reverse("news_detail", args=[feed["draft"].pk]))
    assert r.status_code == 404


@pytest.mark.django_db
def test_admin_sees_drafts_and_filters(admin_client, feed):
    r = admin_client.get(reverse("news_list"))
    assert len(r.data) == 3

    r = admin_client.get(reverse("news_list"), {"published": "0"})
    assert _titles(r) == ["Черновик"]

    r = admin_client.get(reverse("news_list"), {"category": "products"})
    assert _titles(r) == ["Новая модель"]

    r = admin_client.get(reverse("news_list"), {"featured": "1"})
    assert _titles(r) == ["Новая модель"]

    r = admin_client.get(reverse("news_detail", args=[feed["draft"].pk]))
    assert r.status_code == 200


@pytest.mark.django_db
def test_featured_endpoint(api_client, feed):
    News.objects.create(title="Скрытая", featured=True, published=False)
    r = api_client.get(reverse("news_featured"))
    assert _titles(r) == ["Новая модель"]


@pytest.mark.django_db
def test_create_defaults_and_document(admin_client):
    r = admin_client.post(
        reverse("news_list"),
        {"title": "Выставка", "document": {"url": "https://example.com/plan.docx"}},
        format="json",
    )
    assert r.status_code == 201, r.content
    assert r.data["id"].startswith("news-")
    assert r.data["category"] == "company"
    assert r.data["published"] is True
    assert r.data["featured"] is False
    assert r.data["publishDate"]
    assert r.data["document"] == {"name": "plan.docx", "url": "https://example.com/plan.docx", "type": "docx"}

    url = reverse("news_detail", args=[r.data["id"]])
    r = admin_client.patch(url, {"document": None}, format="json")
    assert r.data["document"] is None


@pytest.mark.django_db
def test_title_is_required(admin_client, api_client):
    r = admin_client.post(reverse("news_list"), {"title": " "}, format="json")
    assert r.status_code == 400

    r = api_client.post(reverse("news_list"), {"title": "x"}, format="json")
    assert r.status_code == 401


@pytest.mark.django_db
def test_toggle_featured(admin_client, feed):
    url = reverse("news_toggle_featured", args=[feed["live"].pk])
    assert admin_client.post(url).data["featured"] is True
    assert admin_client.post(url).data["featured"] is False


@pytest.mark.django_db
def test_move_and_reorder(admin_client, feed):
    r = admin_client.post(reverse("news_move", args=[feed["star"].pk]), {"direction": "up"}, format="json")
    assert r.status_code == 200
    assert list(News.objects.values_list("title", flat=True))[1] == "Новая модель"

    ids = [feed["star"].pk, feed["draft"].pk, feed["live"].pk]
    r = admin_client.post(reverse("news_reorder"), {"ids": ids}, format="json")
    assert [i["id"] for i in r.data["items"]] == ids


@pytest.mark.django_db
def test_image_and_document_uploads(admin_client, feed, make_image):
    pk = feed["live"].pk

    r = admin_client.post(reverse("news_image", args=[pk]), {"file": make_image()}, format="multipart")
    assert r.status_code == 200, r.content
    assert r.data["image"].startswith("data:image/jpeg;base64,")

    pdf = SimpleUploadedFile("Прайс.pdf", b"%PDF-1.4 test", content_type="application/pdf")
    r = admin_client.post(reverse("news_document", args=[pk]), {"file": pdf}, format="multipart")
    assert r.status_code == 200, r.content
    assert r.data["document"]["type"] == "pdf"
    assert r.data["document"]["name"] == "Прайс.pdf"
    assert r.data["document"]["url"].startswith("/media/news/documents/")


@pytest.mark.django_db
def test_document_size_limit(admin_client, feed, settings):
    settings.DOCUMENT_MAX_UPLOAD_BYTES = 4
    doc = SimpleUploadedFile("a.pdf", b"%PDF-1.4", content_type="application/pdf")
    r = admin_client.post(reverse("news_document", args=[feed["live"].pk]), {"file": doc}, format="multipart")
    assert r.status_code == 400


def test_document_type_for():
    assert document_type_for("a.PDF") == "pdf"
    assert document_type_for("b.doc") == "doc"
    assert document_type_for("c.docx") == "docx"
    assert document_type_for("d.odt") == "other"
    assert document_type_for("sans_extension") == "other"
