def test_create_category(client, admin_headers):
    response = client.post(
        "/api/admin/categories", json={"name": "Électronique", "order": 2}, headers=admin_headers
    )
    assert response.status_code == 201
    category = response.json()["data"]["category"]
    assert category["name"] == "Électronique"
    assert category["order"] == 2
    assert category["isActive"] is True


def test_category_name_is_unique_ignoring_case(client, admin_headers, make_category):
    make_category("Mode")
    response = client.post("/api/admin/categories", json={"name": "MODE"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Cette catégorie existe déjà"


def test_rename_to_existing_name(client, admin_headers, make_category):
    make_category("Mode")
    other = make_category("Maison")
    response = client.put(f"/api/admin/categories/{other.id}", json={"name": "mode"}, headers=admin_headers)
    assert response.status_code == 400


def test_update_category(client, admin_headers, make_category):
    category = make_category("Maison")
    response = client.put(
        f"/api/admin/categories/{category.id}",
        json={"name": "Maison", "description": "Déco et cuisine"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["category"]["description"] == "Déco et cuisine"


def test_categories_sorted_by_order_then_name(client, make_category):
    make_category("Zèbre", order=1)
    make_category("Beauté", order=2)
    make_category("Alimentation", order=1)

    response = client.get("/api/categories")
    assert [c["name"] for c in response.json()["data"]["categories"]] == ["Alimentation", "Zèbre", "Beauté"]


def test_public_active_filter(client, make_category):
    make_category("Visible")
    make_category("Cachée", is_active=False)

    everything = client.get("/api/categories").json()["data"]["categories"]
    active = client.get("/api/categories", params={"active": "true"}).json()["data"]["categories"]
    assert len(everything) == 2
    assert [c["name"] for c in active] == ["Visible"]


def test_toggle_category_status(client, admin_headers, make_category):
    category = make_category()
    response = client.put(f"/api/admin/categories/{category.id}/toggle-status", headers=admin_headers)
    assert response.json()["data"]["category"]["isActive"] is False


def test_delete_category_in_use_is_blocked(client, admin_headers, make_user, make_category, make_product):
    category = make_category()
    make_product(make_user("merchant", approved=True), category=category)

    response = client.delete(f"/api/admin/categories/{category.id}", headers=admin_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Impossible de supprimer: 1 produit(s) utilisent cette catégorie"
    assert body["details"] == {"productCount": 1}

    assert client.get(f"/api/categories/{category.id}").status_code == 200


def test_delete_unused_category(client, admin_headers, make_category):
    category = make_category()
    response = client.delete(f"/api/admin/categories/{category.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Catégorie supprimée"

    missing = client.get(f"/api/categories/{category.id}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Catégorie introuvable"


def test_category_admin_routes_require_admin(client, headers, make_user):
    response = client.post(
        "/api/admin/categories", json={"name": "Interdit"}, headers=headers(make_user("merchant"))
    )
    assert response.status_code == 403


def test_accented_name_is_unique_ignoring_case(client, admin_headers, make_category):
    make_category("Électronique")
    response = client.post("/api/admin/categories", json={"name": "ÉLECTRONIQUE"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Cette catégorie existe déjà"


def test_rename_to_accented_existing_name(client, admin_headers, make_category):
    make_category("Beauté")
    other = make_category("Maison")
    response = client.put(f"/api/admin/categories/{other.id}", json={"name": "  BEAUTÉ "}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Cette catégorie existe déjà"
