PASSWORD = "secret123"


def test_admin_routes_require_token(client):
    response = client.get("/api/admin/users")
    assert response.status_code == 401


def test_admin_routes_reject_other_roles(client, make_user, headers):
    for role in ("client", "merchant", "delivery"):
        user = make_user(role)
        response = client.get("/api/admin/users", headers=headers(user))
        assert response.status_code == 403
        assert response.json()["message"] == "Accès refusé"


def test_list_users_filters_by_role(client, admin_headers, make_user):
    make_user("client")
    make_user("merchant")
    make_user("merchant")

    merchants = client.get("/api/admin/users", params={"role": "merchant"}, headers=admin_headers)
    assert {u["role"] for u in merchants.json()["data"]["users"]} == {"merchant"}
    assert len(merchants.json()["data"]["users"]) == 2

    everyone = client.get("/api/admin/users", params={"role": "all"}, headers=admin_headers)
    assert len(everyone.json()["data"]["users"]) == 4


def test_create_merchant_with_shop_fields(client, admin_headers):
    response = client.post(
        "/api/admin/users",
        json={
            "name": "Boutique Awa",
            "phone": "+237677000001",
            "password": PASSWORD,
            "role": "merchant",
            "shopName": "Chez Awa",
            "isApproved": True,
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    user = response.json()["data"]["user"]
    assert user["role"] == "merchant"
    assert user["shopName"] == "Chez Awa"
    assert user["isApproved"] is True
    assert "password" not in user


def test_create_delivery_with_vehicle(client, admin_headers):
    response = client.post(
        "/api/admin/users",
        json={
            "name": "Paul",
            "phone": "+237677000002",
            "password": PASSWORD,
            "role": "delivery",
            "vehicleType": "moto",
            "vehicleNumber": "LT-123",
        },
        headers=admin_headers,
    )
    user = response.json()["data"]["user"]
    assert user["vehicleType"] == "moto"
    assert user["vehicleNumber"] == "LT-123"
    assert user["isApproved"] is False


def test_create_user_duplicate(client, admin_headers, make_user):
    existing = make_user("client")
    response = client.post(
        "/api/admin/users",
        json={"name": "Dup", "phone": existing.phone, "password": PASSWORD},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Utilisateur déjà existant"


def test_update_user_without_password_keeps_login(client, admin_headers, make_user):
    user = make_user("client")
    response = client.put(f"/api/admin/users/{user.id}", json={"name": "Renamed"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["user"]["name"] == "Renamed"

    login = client.post("/api/auth/login", json={"phone": user.phone, "password": PASSWORD})
    assert login.status_code == 200


def test_update_user_with_password_rehashes(client, admin_headers, make_user):
    user = make_user("client")
    client.put(f"/api/admin/users/{user.id}", json={"password": "fresh-pass"}, headers=admin_headers)

    assert client.post("/api/auth/login", json={"phone": user.phone, "password": PASSWORD}).status_code == 401
    assert client.post("/api/auth/login", json={"phone": user.phone, "password": "fresh-pass"}).status_code == 200


def test_update_user_role_to_merchant_creates_profile(client, admin_headers, make_user):
    user = make_user("client")
    response = client.put(
        f"/api/admin/users/{user.id}",
        json={"role": "merchant", "shopName": "Nouvelle boutique"},
        headers=admin_headers,
    )
    body = response.json()["data"]["user"]
    assert body["role"] == "merchant"
    assert body["shopName"] == "Nouvelle boutique"


def test_toggle_user_status(client, admin_headers, make_user):
    user = make_user("client")
    first = client.put(f"/api/admin/users/{user.id}/toggle-status", headers=admin_headers)
    assert first.json()["data"]["user"]["isActive"] is False
    second = client.put(f"/api/admin/users/{user.id}/toggle-status", headers=admin_headers)
    assert second.json()["data"]["user"]["isActive"] is True


def test_delete_user(client, admin_headers, make_user):
    user = make_user("client")
    response = client.delete(f"/api/admin/users/{user.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Utilisateur supprimé"

    missing = client.get(f"/api/admin/users/{user.id}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Utilisateur introuvable"


def test_malformed_id_is_not_found(client, admin_headers):
    response = client.get("/api/admin/users/not-an-id", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Ressource non trouvée"


def test_unknown_route_is_not_found(client):
    response = client.get("/api/nowhere")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Non trouvé - /api/nowhere"


def test_merchant_approval(client, admin_headers, make_user):
    pending = make_user("merchant", approved=False)
    make_user("merchant", approved=True)

    listed = client.get("/api/admin/merchants", params={"approved": "false"}, headers=admin_headers)
    assert [m["id"] for m in listed.json()["data"]["merchants"]] == [pending.id]

    approved = client.put(f"/api/admin/merchants/{pending.id}/approve", headers=admin_headers)
    assert approved.json()["data"]["merchant"]["isApproved"] is True
    assert approved.json()["message"] == "Marchand approuvé"

    rejected = client.put(f"/api/admin/merchants/{pending.id}/reject", headers=admin_headers)
    assert rejected.json()["data"]["merchant"]["isApproved"] is False


def test_approve_non_merchant(client, admin_headers, make_user):
    user = make_user("client")
    response = client.put(f"/api/admin/merchants/{user.id}/approve", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Marchand introuvable"


def test_list_delivery_personnel(client, admin_headers, make_user):
    rider = make_user("delivery", vehicle_type="velo")
    make_user("client")
    response = client.get("/api/admin/delivery", headers=admin_headers)
    personnel = response.json()["data"]["deliveryPersonnel"]
    assert [p["id"] for p in personnel] == [rider.id]
    assert personnel[0]["vehicleType"] == "velo"
