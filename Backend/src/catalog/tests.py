import csv
import io
import json

import pandas as pd
import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.urls import reverse

from catalog.models import MotorcycleModel
from catalog.services import parse_pasted_specs, parse_specs_upload, specs_to_csv
from catalog.services.fixtures import load_records
from common.exceptions import SpecsParseError
from news.models import News
from regulations.models import Regulation


def _xlsx(rows):
    buf = io.BytesIO()
    pd.DataFrame(rows).to_excel(buf, index=False, header=False, engine="openpyxl")
    return buf.getvalue()


# ---------------------------------------------------------------------------
# CRUD + droits
# ---------------------------------------------------------------------------

@pytest.mark.django_db
def test_anonymous_can_read_but_not_write(api_client):
    MotorcycleModel.objects.create(name="VMC Atlas 300")

    r = api_client.get(reverse("catalog_models"))
    assert r.status_code == 200
    assert [m["name"] for m in r.data] == ["VMC Atlas 300"]

    r = api_client.post(reverse("catalog_models"), {"name": "Pirate"}, format="json")
    assert r.status_code == 401
    assert MotorcycleModel.objects.count() == 1


@pytest.mark.django_db
def test_create_update_delete_model(admin_client):
    payload = {
        "name": "VMC Scout 150",
        "description": "Городской мотоцикл",
        "specifications": {" Объем двигателя ": " 149 см3 "},
        "yandexDiskLink": "https://disk.yandex.ru/d/abc",
    }
    r = admin_client.post(reverse("catalog_models"), payload, format="json")
    assert r.status_code == 201, r.content
    created = r.data
    assert created["id"].startswith("vmc-")
    assert created["order"] == 1
    assert created["specifications"] == {"Объем двигателя": "149 см3"}

    url = reverse("catalog_model_detail", args=[created["id"]])
    r = admin_client.patch(url, {"description": "Обновлено"}, format="json")
    assert r.status_code == 200
    assert r.data["description"] == "Обновлено"
    assert r.data["createdAt"] == created["createdAt"]
    assert r.data["id"] == created["id"]

    r = admin_client.delete(url)
    assert r.status_code == 204
    assert not MotorcycleModel.objects.exists()


@pytest.mark.django_db
def test_blank_name_is_rejected(admin_client):
    r = admin_client.post(reverse("catalog_models"), {"name": "   "}, format="json")
    assert r.status_code == 400
    assert r.data["error"]["code"] == "invalid"
    assert "name" in r.data["error"]["detail"]


@pytest.mark.django_db
def test_new_models_go_last(admin_client):
    MotorcycleModel.objects.create(name="Premier", order=4)
    r = admin_client.post(reverse("catalog_models"), {"name": "Second"}, format="json")
    assert r.data["order"] == 5


@pytest.mark.django_db
def test_list_order_nulls_last_then_newest(api_client):
    MotorcycleModel.objects.create(name="sans ordre")
    MotorcycleModel.objects.create(name="deux", order=2)
    MotorcycleModel.objects.create(name="un", order=1)

    r = api_client.get(reverse("catalog_models"))
    assert [m["name"] for m in r.data] == ["un", "deux", "sans ordre"]


@pytest.mark.django_db
def test_search_on_name_and_description(api_client):
    MotorcycleModel.objects.create(name="VMC Enduro", description="для бездорожья")
    MotorcycleModel.objects.create(name="VMC City", description="для города")

    r = api_client.get(reverse("catalog_models"), {"q": "enduro"})
    assert [m["name"] for m in r.data] == ["VMC Enduro"]

    r = api_client.get(reverse("catalog_models"), {"q": "города"})
    assert [m["name"] for m in r.data] == ["VMC City"]

    r = api_client.get(reverse("catalog_models"), {"q": "  "})
    assert len(r.data) == 2


# ---------------------------------------------------------------------------
# Ordre
# ---------------------------------------------------------------------------

@pytest.mark.django_db
def test_move_order_and_reorder_endpoints(admin_client):
    a = MotorcycleModel.objects.create(name="A", order=1)
    b = MotorcycleModel.objects.create(name="B", order=2)

    r = admin_client.post(reverse("catalog_model_move", args=[b.pk]), {"direction": "up"}, format="json")
    assert r.status_code == 200
    assert {i["id"]: i["order"] for i in r.data["items"]} == {b.pk: 1, a.pk: 2}

    r = admin_client.post(reverse("catalog_model_move", args=[b.pk]), {"direction": "up"}, format="json")
    assert r.status_code == 400
    assert r.data["error"]["code"] == "ordering_error"

    r = admin_client.post(reverse("catalog_model_order", args=[a.pk]), {"order": 9}, format="json")
    assert r.data["items"] == [{"id": a.pk, "order": 9}]

    r = admin_client.post(reverse("catalog_models_reorder"), {"ids": [a.pk, b.pk]}, format="json")
    assert [i["id"] for i in r.data["items"]] == [a.pk, b.pk]

    r = admin_client.post(reverse("catalog_models_reorder"), {"ids": ["ghost"]}, format="json")
    assert r.status_code == 400


@pytest.mark.django_db
def test_move_unknown_model_is_404(admin_client):
    r = admin_client.post(reverse("catalog_model_move", args=["ghost"]), {"direction": "down"}, format="json")
    assert r.status_code == 404


@pytest.mark.django_db
def test_move_requires_valid_direction(admin_client):
    item = MotorcycleModel.objects.create(name="A")
    r = admin_client.post(reverse("catalog_model_move", args=[item.pk]), {"direction": "left"}, format="json")
    assert r.status_code == 400


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

@pytest.mark.django_db
def test_upload_images_keeps_valid_files(admin_client, make_image):
    item = MotorcycleModel.objects.create(name="Photo")
    files = [make_image(name="a.png"), make_image(name="readme.txt", content_type="text/plain")]

    r = admin_client.post(reverse("catalog_model_images", args=[item.pk]), {"images": files}, format="multipart")
    assert r.status_code == 201, r.content
    assert r.data["added"] == 1
    assert r.data["rejected"][0]["file"] == "readme.txt"
    assert r.data["images"][0].startswith("data:image/jpeg;base64,")

    item.refresh_from_db()
    assert len(item.images) == 1

    r = admin_client.delete(reverse("catalog_model_image_delete", args=[item.pk, 0]))
    assert r.status_code == 200
    assert r.data["images"] == []

    r = admin_client.delete(reverse("catalog_model_image_delete", args=[item.pk, 0]))
    assert r.status_code == 404


@pytest.mark.django_db
def test_upload_only_invalid_images_is_rejected(admin_client):
    item = MotorcycleModel.objects.create(name="Photo")
    bad = SimpleUploadedFile("x.txt", b"hello", content_type="text/plain")

    r = admin_client.post(reverse("catalog_model_images", args=[item.pk]), {"images": [bad]}, format="multipart")
    assert r.status_code == 400
    assert r.data["error"]["code"] == "image_rejected"


# ---------------------------------------------------------------------------
# Caracteristiques
# ---------------------------------------------------------------------------

def test_parse_pasted_text_mixed_separators():
    text = 'Двигатель\t"250 см3"\nМасса;140 кг\nЦвет,красный\nстрока без значения\nПустое\t\n'
    assert parse_pasted_specs(text) == {
        "Двигатель": "250 см3",
        "Масса": "140 кг",
        "Цвет": "красный",
    }


def test_parse_pasted_text_later_keys_win():
    assert parse_pasted_specs("Цвет\tчерный\nЦвет\tбелый") == {"Цвет": "белый"}


def test_parse_xlsx_skips_header_and_incomplete_rows():
    data = _xlsx([
        ["Параметр", "Значение"],
        ["Мощность", "21 л.с."],
        ["Пусто", None],
        ["Бак", "12 л"],
    ])
    upload = SimpleUploadedFile("specs.xlsx", data)
    assert parse_specs_upload(upload) == {"Мощность": "21 л.с.", "Бак": "12 л"}


def test_parse_csv_in_cp1251():
    upload = SimpleUploadedFile("specs.csv", "Тормоза;дисковые\n".encode("cp1251"))
    assert parse_specs_upload(upload) == {"Тормоза": "дисковые"}


def test_parse_rejects_unknown_extension():
    with pytest.raises(SpecsParseError):
        parse_specs_upload(SimpleUploadedFile("specs.pdf", b"%PDF"))


def test_specs_csv_export_format():
    rows = list(csv.reader(io.StringIO(specs_to_csv({"Вес": "140 кг"}))))
    assert rows == [["Название характеристики", "Значение"], ["Вес", "140 кг"]]
    assert specs_to_csv({"a": "b"}).splitlines()[1] == '"a","b"'


@pytest.mark.django_db
def test_specs_parse_endpoint(admin_client):
    r = admin_client.post(reverse("catalog_specs_parse"), {"text": "Вес\t140 кг"}, format="json")
    assert r.status_code == 200
    assert r.data == {"specifications": {"Вес": "140 кг"}, "count": 1}

    r = admin_client.post(reverse("catalog_specs_parse"), {"text": "rien ici"}, format="json")
    assert r.status_code == 400
    assert r.data["error"]["code"] == "specs_parse_error"


@pytest.mark.django_db
def test_specs_import_merges_and_export_downloads(admin_client):
    item = MotorcycleModel.objects.create(name="Трейл", specifications={"Вес": "150 кг", "Цвет": "синий"})

    upload = SimpleUploadedFile("specs.xlsx", _xlsx([["k", "v"], ["Вес", "140 кг"]]))
    r = admin_client.post(
        reverse("catalog_model_specs_import", args=[item.pk]), {"file": upload}, format="multipart"
    )
    assert r.status_code == 200, r.content
    assert r.data["model"]["specifications"] == {"Вес": "140 кг", "Цвет": "синий"}

    r = admin_client.get(reverse("catalog_model_specs_export", args=[item.pk]))
    assert r.status_code == 200
    assert r["Content-Type"].startswith("text/csv")
    assert "attachment" in r["Content-Disposition"]
    assert '"Вес","140 кг"' in r.content.decode("utf-8")


@pytest.mark.django_db
def test_export_of_empty_table_is_rejected(admin_client):
    item = MotorcycleModel.objects.create(name="Vide")
    r = admin_client.get(reverse("catalog_model_specs_export", args=[item.pk]))
    assert r.status_code == 400


# ---------------------------------------------------------------------------
# Anciens endpoints PHP
# ---------------------------------------------------------------------------

def _save(client, payload):
    return client.post(reverse("legacy_save_models"), data=json.dumps(payload), content_type="application/json")


@pytest.mark.django_db
def test_legacy_load_models_returns_bare_list(api_client):
    MotorcycleModel.objects.create(name="A", order=1)
    r = api_client.get(reverse("legacy_load_models"))
    assert r.status_code == 200
    assert [m["name"] for m in r.json()] == ["A"]


@pytest.mark.django_db
def test_legacy_save_models_actions(admin_client):
    r = _save(admin_client, {"action": "add_model", "model": {"name": "Legacy"}})
    assert r.status_code == 200, r.content
    body = r.json()
    assert body["success"] is True
    model_id = body["modelId"]
    assert MotorcycleModel.objects.get(pk=model_id).order == 1

    # id deja pris -> nouvel id
    r = _save(admin_client, {"action": "add_model", "model": {"id": model_id, "name": "Copie"}})
    assert r.json()["modelId"] != model_id

    r = _save(admin_client, {"action": "update_model", "model": {"id": model_id, "name": "Renomme"}})
    assert r.status_code == 200
    assert MotorcycleModel.objects.get(pk=model_id).name == "Renomme"

    r = _save(admin_client, {"action": "update_order", "modelId": model_id, "order": 5})
    assert r.status_code == 200
    assert MotorcycleModel.objects.get(pk=model_id).order == 5

    r = _save(admin_client, {"action": "delete_model", "modelId": model_id})
    assert r.status_code == 200
    r = _save(admin_client, {"action": "delete_model", "modelId": model_id})
    assert r.status_code == 404
    assert r.json() == {"error": "Model not found"}


@pytest.mark.django_db
def test_legacy_save_models_errors(admin_client, api_client):
    r = admin_client.post(reverse("legacy_save_models"), data="{bad", content_type="application/json")
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON"}

    assert _save(admin_client, {}).json() == {"error": "Action required"}
    assert _save(admin_client, {"action": "explode"}).json() == {"error": "Unknown action: explode"}
    assert _save(admin_client, {"action": "update_model", "model": {"id": "ghost", "name": "x"}}).status_code == 404
    assert _save(admin_client, {"action": "update_order", "modelId": "x"}).status_code == 400

    assert _save(api_client, {"action": "add_model", "model": {"name": "x"}}).status_code == 401
    assert admin_client.get(reverse("legacy_save_models")).status_code == 405


# ---------------------------------------------------------------------------
# Fichiers JSON historiques
# ---------------------------------------------------------------------------

@pytest.mark.django_db
def test_load_fixtures_skips_filled_collections_unless_forced(tmp_path):
    (tmp_path / "models.json").write_text(json.dumps([
        {"id": "vmc-1", "name": "Из файла", "createdAt": "2024-03-01T10:00:00Z", "images": []},
        {"id": "vmc-2", "name": "Второй", "order": 7},
    ], ensure_ascii=False), encoding="utf-8")
    (tmp_path / "regulations.json").write_text(json.dumps([
        {"id": "reg-1", "title": "ТО-1", "category": "maintenance", "downloadLinks": {"pdf": "https://example.com/to1.pdf"}},
    ], ensure_ascii=False), encoding="utf-8")
    (tmp_path / "news.json").write_text(json.dumps([
        {"id": "news-1", "title": "Открытие салона", "publishDate": "2024-05-01T09:00:00.000Z", "published": True},
    ], ensure_ascii=False), encoding="utf-8")

    call_command("load_fixtures", dir=str(tmp_path))

    first = MotorcycleModel.objects.get(pk="vmc-1")
    assert first.order == 1
    assert first.created_at.year == 2024
    assert MotorcycleModel.objects.get(pk="vmc-2").order == 7
    assert Regulation.objects.get(pk="reg-1").download_pdf == "https://example.com/to1.pdf"
    assert News.objects.get(pk="news-1").publish_date.month == 5

    MotorcycleModel.objects.filter(pk="vmc-1").update(name="Modifie")
    call_command("load_fixtures", dir=str(tmp_path), only="models")
    assert MotorcycleModel.objects.get(pk="vmc-1").name == "Modifie"

    call_command("load_fixtures", dir=str(tmp_path), only="models", force=True)
    assert MotorcycleModel.objects.get(pk="vmc-1").name == "Из файла"


@pytest.mark.django_db
def test_invalid_fixture_record_is_reported():
    from catalog.services.fixtures import FixtureError

    with pytest.raises(FixtureError):
        load_records("models", [{"id": "vmc-x", "name": ""}])


@pytest.mark.django_db
def test_export_fixtures_writes_backup(tmp_path):
    MotorcycleModel.objects.create(name="Экспорт", order=1)

    call_command("export_fixtures", dir=str(tmp_path))
    exported = json.loads((tmp_path / "models.json").read_text(encoding="utf-8"))
    assert [m["name"] for m in exported] == ["Экспорт"]
    assert not (tmp_path / "models.backup.json").exists()

    MotorcycleModel.objects.create(name="Второй", order=2)
    call_command("export_fixtures", dir=str(tmp_path))
    backup = json.loads((tmp_path / "models.backup.json").read_text(encoding="utf-8"))
    assert len(backup) == 1
    assert len(json.loads((tmp_path / "models.json").read_text(encoding="utf-8"))) == 2
    assert (tmp_path / "news.json").exists()
