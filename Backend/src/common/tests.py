import base64
import io
import json

import pytest
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from PIL import Image

from catalog.models import MotorcycleModel
from common import changes, ordering
from common.exceptions import ImageRejected, OrderingError
from common.images import DATA_URL_PREFIX, compress_image, process_image_upload, process_image_uploads


def _decode(data_url):
    assert data_url.startswith(DATA_URL_PREFIX)
    return Image.open(io.BytesIO(base64.b64decode(data_url[len(DATA_URL_PREFIX):])))


@pytest.mark.django_db
def test_health_and_ping(api_client):
    r = api_client.get(reverse("health"))
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = api_client.get(reverse("ping"))
    assert r.status_code == 200
    assert r.json()["pong"] is True

    r = api_client.get(reverse("info"))
    assert r.json()["images"]["maxWidth"] == 800
    assert r.json()["collections"] == ["models", "regulations", "news"]


def test_request_id_header_is_echoed(api_client):
    r = api_client.get(reverse("ping"), HTTP_X_REQUEST_ID="abc-123")
    assert r["X-Request-ID"] == "abc-123"


@pytest.mark.django_db
def test_health_check_report_warns_on_missing_fixture_files(api_client):
    r = api_client.get(reverse("legacy_health_check"))
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "warning"
    assert body["checks"]["database"]["status"] == "ok"
    assert body["checks"]["models_file"]["exists"] is False
    assert "server_info" in body and body["recommendations"]


@pytest.mark.django_db
def test_health_check_report_fails_on_invalid_json(api_client, settings, tmp_path):
    settings.FIXTURES_DIR = tmp_path
    for name in ("regulations", "news"):
        (tmp_path / f"{name}.json").write_text("[]", encoding="utf-8")
    (tmp_path / "models.json").write_text("{oops", encoding="utf-8")

    r = api_client.get(reverse("legacy_health_check"))
    assert r.status_code == 500
    body = r.json()
    assert body["status"] == "error"
    assert body["checks"]["models_file"]["status"] == "error"
    assert body["checks"]["news_file"]["count"] == 0


@pytest.mark.django_db
def test_changes_revision_moves_on_save_and_delete(api_client):
    before = api_client.get(reverse("changes")).json()["models"]["revision"]

    item = MotorcycleModel.objects.create(name="VMC Trail 250")
    item.delete()

    after = api_client.get(reverse("changes")).json()
    assert after["models"]["revision"] == before + 2
    assert after["models"]["updatedAt"]
    assert set(after) == {"models", "regulations", "news"}


def test_bump_starts_from_zero():
    cache.delete("changes:unit-test:revision")
    assert changes.bump("unit-test") == 1
    assert changes.bump("unit-test") == 2


# ---------------------------------------------------------------------------
# Ordre d'affichage
# ---------------------------------------------------------------------------

@pytest.fixture
def three_models():
    return [
        MotorcycleModel.objects.create(name=name, order=position)
        for position, name in enumerate(["A", "B", "C"], start=1)
    ]


def _names():
    return list(MotorcycleModel.objects.values_list("name", flat=True))


@pytest.mark.django_db
def test_move_swaps_with_neighbour(three_models):
    a, b, c = three_models
    moved = ordering.move(MotorcycleModel, b.pk, "up")
    assert [m.pk for m in moved] == [b.pk, a.pk]
    assert _names() == ["B", "A", "C"]

    ordering.move(MotorcycleModel, b.pk, "down")
    assert _names() == ["A", "B", "C"]


@pytest.mark.django_db
def test_move_rejects_boundaries(three_models):
    a, _, c = three_models
    with pytest.raises(OrderingError):
        ordering.move(MotorcycleModel, a.pk, "up")
    with pytest.raises(OrderingError):
        ordering.move(MotorcycleModel, c.pk, "down")


@pytest.mark.django_db
def test_move_with_duplicate_orders_renumbers_first(three_models):
    MotorcycleModel.objects.update(order=1)
    first, second = list(MotorcycleModel.objects.all())[:2]

    ordering.move(MotorcycleModel, second.pk, "up")
    orders = dict(MotorcycleModel.objects.values_list("pk", "order"))
    assert orders[second.pk] == 1
    assert orders[first.pk] == 2
    assert sorted(orders.values()) == [1, 2, 3]


@pytest.mark.django_db
def test_reorder_follows_ids_and_appends_the_rest(three_models):
    a, b, c = three_models
    ordering.reorder(MotorcycleModel, [c.pk, a.pk])
    assert _names() == ["C", "A", "B"]
    assert list(MotorcycleModel.objects.values_list("order", flat=True)) == [1, 2, 3]


@pytest.mark.django_db
def test_reorder_rejects_unknown_and_duplicate_ids(three_models):
    a = three_models[0]
    with pytest.raises(OrderingError):
        ordering.reorder(MotorcycleModel, ["nope"])
    with pytest.raises(OrderingError):
        ordering.reorder(MotorcycleModel, [a.pk, a.pk])


@pytest.mark.django_db
def test_next_order():
    assert ordering.next_order(MotorcycleModel) == 1
    MotorcycleModel.objects.create(name="X", order=7)
    assert ordering.next_order(MotorcycleModel) == 8


# ---------------------------------------------------------------------------
# Compression d'images
# ---------------------------------------------------------------------------

def test_compress_scales_down_to_max_width(make_image):
    img = _decode(compress_image(make_image(width=1600, height=1200)))
    assert img.format == "JPEG"
    assert img.size == (800, 600)


def test_compress_never_upscales(make_image):
    img = _decode(compress_image(make_image(width=320, height=200)))
    assert img.size == (320, 200)


def test_compress_flattens_transparency_on_white(make_image):
    img = _decode(compress_image(make_image(width=100, height=100, mode="RGBA")))
    assert img.mode == "RGB"
    r, g, b = img.getpixel((50, 50))
    # rouge semi transparent sur blanc -> rose clair
    assert r > 200 and g > 100 and b > 100


def test_compress_applies_exif_orientation():
    # capteur 400x200, orientation 6: affichee en portrait 200x400
    exif = Image.Exif()
    exif[0x0112] = 6
    buf = io.BytesIO()
    Image.new("RGB", (400, 200), (10, 120, 200)).save(buf, format="JPEG", exif=exif.tobytes())
    upload = SimpleUploadedFile("portrait.jpg", buf.getvalue(), content_type="image/jpeg")

    assert _decode(compress_image(upload)).size == (200, 400)


def test_oversized_pixel_count_is_rejected_not_crashing(make_image, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
    with pytest.raises(ImageRejected) as exc:
        process_image_upload(make_image(width=100, height=100))
    assert "chargement" in str(exc.value.detail)


def test_process_rejects_non_image_mime(make_image):
    upload = make_image(name="notes.txt", content_type="text/plain")
    with pytest.raises(ImageRejected):
        process_image_upload(upload)


def test_process_rejects_oversized_file(make_image, settings):
    settings.IMAGE_MAX_UPLOAD_BYTES = 100
    with pytest.raises(ImageRejected) as exc:
        process_image_upload(make_image())
    assert "trop volumineux" in str(exc.value.detail)


def test_undecodable_image_is_rejected():
    upload = SimpleUploadedFile("broken.png", b"not really a png", content_type="image/png")
    with pytest.raises(ImageRejected) as exc:
        process_image_upload(upload)
    assert "chargement" in str(exc.value.detail)


def test_batch_keeps_accepted_files(make_image):
    good = make_image(name="ok.png")
    bad = make_image(name="bad.txt", content_type="text/plain")
    accepted, rejected = process_image_uploads([good, bad])
    assert len(accepted) == 1
    assert [item["file"] for item in rejected] == ["bad.txt"]


@pytest.mark.django_db
def test_error_envelope_shape(api_client):
    r = api_client.post(reverse("catalog_models"), data=json.dumps({"name": "x"}), content_type="application/json")
    assert r.status_code == 401
    assert set(r.json()["error"]) == {"code", "detail", "status"}
