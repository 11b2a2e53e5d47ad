import io
import os
import uuid

from inventory_service.app.models.items import Item
from inventory_service.app.router import items_router
from shared.core.config import settings


def test_create_item_defaults(client, member, create_item):
    item = create_item(name="  Cable  ", sku="CB-1")
    assert item["name"] == "Cable"
    assert item["min_stock_level"] == 5
    assert item["stock_value"] == 200.0
    assert item["created_by"] == {"id": member.id, "email": member.email,
                                  "full_name": "User 1"}
    # nulls are rendered as empty strings
    assert item["barcode"] == ""
    assert item["category"] == ""


def test_create_item_message(client, member):
    resp = client.post("/api/items", headers=member.headers,
                       json={"name": "Lamp", "price": 12.5})
    assert resp.status_code == 201
    assert resp.json()["message"] == "Item added successfully"
    assert resp.json()["data"]["quantity"] == 0


def test_create_item_validation(client, member):
    resp = client.post("/api/items", headers=member.headers,
                       json={"name": "   ", "price": 1})
    assert resp.status_code == 422

    resp = client.post("/api/items", headers=member.headers,
                       json={"name": "Bad", "price": -1})
    assert resp.status_code == 422

    resp = client.post("/api/items", headers=member.headers,
                       json={"name": "Bad", "price": 1, "quantity": -3})
    assert resp.status_code == 422


def test_create_item_with_unknown_category(client, member):
    resp = client.post("/api/items", headers=member.headers, json={
        "name": "Orphan", "price": 1,
        "category_id": "00000000-0000-0000-0000-000000000000"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Category not found"


def test_duplicate_barcode_rejected(client, member, create_item):
    create_item(name="First", barcode="1234567890123")
    resp = client.post("/api/items", headers=member.headers,
                       json={"name": "Second", "price": 1, "barcode": "1234567890123"})
    assert resp.status_code == 400
    assert "already assigned" in resp.json()["message"]


def test_items_without_barcode_may_coexist(create_item):
    create_item(name="A", barcode="")
    create_item(name="B")


def test_get_item_and_not_found(client, member, create_item, category):
    item = create_item(category_id=category["id"])
    resp = client.get(f"/api/items/{item['id']}", headers=member.headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["category"]["name"] == "Electronics"

    resp = client.get("/api/items/00000000-0000-0000-0000-000000000000",
                      headers=member.headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Item not found"


def test_list_filters_and_sorting(client, member, create_item, category):
    create_item(name="Keyboard", price=50, quantity=2, category_id=category["id"])
    create_item(name="Mouse", price=20, quantity=30, sku="MS-01")
    create_item(name="Monitor", price=200, quantity=1, description="27 inch screen")

    resp = client.get("/api/items", headers=member.headers)
    data = resp.json()["data"]
    assert data["total"] == 3
    assert [i["name"] for i in data["items"]] == ["Keyboard", "Monitor", "Mouse"]

    resp = client.get("/api/items", headers=member.headers,
                      params={"sort_by": "price", "order": "desc"})
    assert [i["name"] for i in resp.json()["data"]["items"]] == ["Monitor", "Keyboard", "Mouse"]

    resp = client.get("/api/items", headers=member.headers, params={"search": "ms-"})
    assert [i["name"] for i in resp.json()["data"]["items"]] == ["Mouse"]

    resp = client.get("/api/items", headers=member.headers, params={"search": "SCREEN"})
    assert [i["name"] for i in resp.json()["data"]["items"]] == ["Monitor"]

    resp = client.get("/api/items", headers=member.headers,
                      params={"category_id": category["id"]})
    assert [i["name"] for i in resp.json()["data"]["items"]] == ["Keyboard"]

    resp = client.get("/api/items", headers=member.headers, params={"low_stock": "true"})
    items = resp.json()["data"]["items"]
    assert [i["name"] for i in items] == ["Keyboard", "Monitor"]
    assert all(i["is_low_stock"] for i in items)

    resp = client.get("/api/items", headers=member.headers, params={"skip": 1, "limit": 1})
    data = resp.json()["data"]
    assert data["total"] == 3
    assert [i["name"] for i in data["items"]] == ["Monitor"]


def test_list_rejects_bad_query(client, member):
    resp = client.get("/api/items", headers=member.headers, params={"sort_by": "colour"})
    assert resp.status_code == 422
    resp = client.get("/api/items", headers=member.headers, params={"limit": 0})
    assert resp.status_code == 422


def test_empty_list_renders_as_list(client, member):
    resp = client.get("/api/items", headers=member.headers)
    assert resp.json()["data"] == {"items": [], "total": 0}


def test_update_item(client, member, create_item):
    item = create_item()
    resp = client.put(f"/api/items/{item['id']}", headers=member.headers,
                      json={"price": 12.0, "name": None, "location": "Aisle 4"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Item updated successfully"
    assert body["data"]["price"] == 12.0
    assert body["data"]["name"] == "Widget"
    assert body["data"]["location"] == "Aisle 4"


def test_update_item_barcode_conflict(client, member, create_item):
    create_item(name="A", barcode="111")
    other = create_item(name="B", barcode="222")
    resp = client.put(f"/api/items/{other['id']}", headers=member.headers,
                      json={"barcode": "111"})
    assert resp.status_code == 400

    # keeping its own barcode is fine
    resp = client.put(f"/api/items/{other['id']}", headers=member.headers,
                      json={"barcode": "222"})
    assert resp.status_code == 200


def test_update_missing_item(client, member):
    resp = client.put("/api/items/00000000-0000-0000-0000-000000000000",
                      headers=member.headers, json={"price": 1})
    assert resp.status_code == 404


def test_delete_item_requires_admin(client, member, staff, admin, create_item):
    item = create_item()
    assert client.delete(f"/api/items/{item['id']}", headers=member.headers).status_code == 403
    assert client.delete(f"/api/items/{item['id']}", headers=staff.headers).status_code == 403

    resp = client.delete(f"/api/items/{item['id']}", headers=admin.headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Item deleted successfully"
    assert resp.json()["data"]["id"] == item["id"]

    assert client.get(f"/api/items/{item['id']}", headers=admin.headers).status_code == 404
    assert client.delete(f"/api/items/{item['id']}", headers=admin.headers).status_code == 404


def test_delete_item_removes_transactions(client, staff, admin, create_item):
    item = create_item()
    client.post("/api/transactions", headers=staff.headers,
                json={"item_id": item["id"], "quantity": 5, "type": "in"})

    client.delete(f"/api/items/{item['id']}", headers=admin.headers)
    resp = client.get("/api/transactions", headers=admin.headers)
    assert resp.json()["data"]["total"] == 0


def test_upload_image(client, member, create_item):
    item = create_item()
    resp = client.post(
        f"/api/items/{item['id']}/image", headers=member.headers,
        files={"file": ("photo.png", io.BytesIO(b"\x89PNG fake"), "image/png")})
    assert resp.status_code == 200
    image = resp.json()["data"]["image"]
    assert image.startswith(f"/uploads/items/{item['id']}-")
    assert image.endswith(".png")

    served = client.get(image)
    assert served.status_code == 200
    assert served.content == b"\x89PNG fake"


def test_upload_rejects_non_images(client, member, create_item):
    item = create_item()
    resp = client.post(
        f"/api/items/{item['id']}/image", headers=member.headers,
        files={"file": ("notes.txt", io.BytesIO(b"hello"), "text/plain")})
    assert resp.status_code == 400
    assert resp.json()["status_code"] == "1001"


def test_creator_without_user_record_keeps_id(client, member, inventory_db):
    ghost = uuid.uuid4()
    item = Item(name="Imported", price=1.0, quantity=1, min_stock_level=0, created_by=ghost)
    inventory_db.add(item)
    inventory_db.commit()

    resp = client.get(f"/api/items/{item.id}", headers=member.headers)
    assert resp.json()["data"]["created_by"] == {"id": str(ghost), "email": "", "full_name": ""}


def test_search_treats_wildcards_literally(client, member, create_item):
    create_item(name="50% Off Sticker")
    create_item(name="500 Pack")
    create_item(name="A_B Cable")
    create_item(name="AxB Cable")

    def names(term):
        resp = client.get("/api/items", headers=member.headers, params={"search": term})
        return [i["name"] for i in resp.json()["data"]["items"]]

    assert names("%") == ["50% Off Sticker"]
    assert names("50%") == ["50% Off Sticker"]
    assert names("a_b") == ["A_B Cable"]


def test_sort_by_category_and_quantity(client, member, admin, create_item):
    alpha = client.post("/api/categories", headers=admin.headers,
                        json={"name": "Alpha"}).json()["data"]
    beta = client.post("/api/categories", headers=admin.headers,
                       json={"name": "Beta"}).json()["data"]
    create_item(name="Zed", quantity=7, category_id=alpha["id"])
    create_item(name="Apple", quantity=3, category_id=beta["id"])
    create_item(name="Mango", quantity=12, category_id=alpha["id"])

    def names(**params):
        resp = client.get("/api/items", headers=member.headers, params=params)
        assert resp.status_code == 200
        return [i["name"] for i in resp.json()["data"]["items"]]

    assert names(sort_by="category") == ["Mango", "Zed", "Apple"]
    assert names(sort_by="category", order="desc") == ["Apple", "Mango", "Zed"]
    assert names(sort_by="quantity") == ["Apple", "Zed", "Mango"]
    assert names(sort_by="created_at", order="desc")[0] == "Mango"


def test_replacing_image_removes_previous_file(client, member, create_item):
    item = create_item()
    url = f"/api/items/{item['id']}/image"
    first = client.post(url, headers=member.headers, files={
        "file": ("a.png", io.BytesIO(b"first"), "image/png")}).json()["data"]["image"]
    second = client.post(url, headers=member.headers, files={
        "file": ("b.jpg", io.BytesIO(b"second"), "image/jpeg")}).json()["data"]["image"]

    items_dir = os.path.join(settings.UPLOAD_DIR, "items")
    assert not os.path.exists(os.path.join(items_dir, os.path.basename(first)))
    assert os.path.exists(os.path.join(items_dir, os.path.basename(second)))


def test_oversized_image_is_rejected(monkeypatch, client, member, create_item):
    monkeypatch.setattr(items_router, "MAX_IMAGE_BYTES", 8)
    monkeypatch.setattr(items_router, "CHUNK_BYTES", 4)
    item = create_item()

    resp = client.post(f"/api/items/{item['id']}/image", headers=member.headers,
                       files={"file": ("big.png", io.BytesIO(b"0123456789"), "image/png")})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Image exceeds the 5 MB limit"

    resp = client.get(f"/api/items/{item['id']}", headers=member.headers)
    assert resp.json()["data"]["image"] == ""
