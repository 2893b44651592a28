from datetime import timedelta

from app.application.services.auth_service import create_access_token

PASSWORD = "secret123"


def register(client, **overrides):
    body = {"phone": "+237690000001", "password": PASSWORD, "name": "Awa", "email": "awa@example.com"}
    body.update(overrides)
    return client.post("/api/auth/register", json=body)


def test_register_client(client):
    response = register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["token"]
    user = body["data"]["user"]
    assert user["role"] == "client"
    assert user["addresses"] == []
    assert "password" not in user
    assert "passwordHash" not in user


def test_register_as_admin_stores_client(client):
    response = register(client, role="admin")
    assert response.status_code == 201
    assert response.json()["data"]["user"]["role"] == "client"


def test_register_merchant_starts_unapproved(client):
    response = register(client, role="merchant")
    user = response.json()["data"]["user"]
    assert user["role"] == "merchant"
    assert user["isApproved"] is False
    assert user["shopName"] is None


def test_register_duplicate_phone(client):
    register(client)
    response = register(client, email="other@example.com")
    assert response.status_code == 400
    assert response.json()["message"] == "Ce numéro de téléphone est déjà enregistré"


def test_register_duplicate_email(client):
    register(client)
    response = register(client, phone="+237690000002", email="AWA@example.com")
    assert response.status_code == 400
    assert response.json()["message"] == "Cet email est déjà utilisé"


def test_register_missing_fields(client):
    response = client.post("/api/auth/register", json={"name": "Awa"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "Le numéro de téléphone est requis" in body["message"]
    assert "Le mot de passe est requis" in body["message"]


def test_register_invalid_phone(client):
    response = register(client, phone="0123")
    assert response.status_code == 400
    assert response.json()["message"] == "Numéro de téléphone invalide"


def test_register_short_password(client):
    response = register(client, password="123")
    assert response.status_code == 400
    assert "au moins 6" in response.json()["message"]


def test_login(client, make_user):
    user = make_user("client")
    response = client.post("/api/auth/login", json={"phone": user.phone, "password": PASSWORD})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token"]
    assert data["user"]["id"] == user.id
    assert response.json()["message"] == "Connexion réussie"


def test_login_wrong_password_and_unknown_phone_share_message(client, make_user):
    user = make_user("client")
    wrong = client.post("/api/auth/login", json={"phone": user.phone, "password": "nope-nope"})
    unknown = client.post("/api/auth/login", json={"phone": "+237699999999", "password": PASSWORD})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["message"] == unknown.json()["message"] == "Identifiants invalides"


def test_login_disabled_account(client, make_user):
    user = make_user("client", is_active=False)
    response = client.post("/api/auth/login", json={"phone": user.phone, "password": PASSWORD})
    assert response.status_code == 401
    assert response.json()["message"] == "Votre compte a été désactivé"


def test_me_requires_token(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["message"] == "Non autorisé, token manquant"


def test_me_rejects_bad_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["message"] == "Token invalide"


def test_me_rejects_expired_token(client, make_user):
    user = make_user("client")
    token = create_access_token(user, expires_delta=timedelta(seconds=-10))
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Token expiré"


def test_me_rejects_disabled_user(client, make_user, headers):
    user = make_user("client", is_active=False)
    response = client.get("/api/auth/me", headers=headers(user))
    assert response.status_code == 401
    assert response.json()["message"] == "Compte désactivé"


def test_me_returns_role_variant(client, make_user, headers):
    merchant = make_user("merchant", approved=True, shop_name="Chez Awa")
    response = client.get("/api/auth/me", headers=headers(merchant))
    user = response.json()["data"]["user"]
    assert user["shopName"] == "Chez Awa"
    assert user["isApproved"] is True
    assert "addresses" not in user


def test_password_reset_flow(client, make_user):
    user = make_user("client")
    otp = client.post("/api/auth/forgot-password", json={"phone": user.phone}).json()["data"]["otp"]
    assert len(otp) == 6

    bad = client.post(
        "/api/auth/reset-password",
        json={"phone": user.phone, "otp": "000000", "newPassword": "brand-new"},
    )
    assert bad.status_code == 400
    assert bad.json()["message"] == "OTP invalide ou expiré"

    response = client.post(
        "/api/auth/reset-password", json={"phone": user.phone, "otp": otp, "newPassword": "brand-new"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["token"]

    login = client.post("/api/auth/login", json={"phone": user.phone, "password": "brand-new"})
    assert login.status_code == 200

    # The code is single-use
    reused = client.post(
        "/api/auth/reset-password", json={"phone": user.phone, "otp": otp, "newPassword": "another-one"}
    )
    assert reused.status_code == 400


def test_forgot_password_unknown_phone(client):
    response = client.post("/api/auth/forgot-password", json={"phone": "+237699999999"})
    assert response.status_code == 404


def test_update_password(client, make_user, headers):
    user = make_user("client")
    wrong = client.put(
        "/api/auth/password",
        json={"currentPassword": "not-it", "newPassword": "changed1"},
        headers=headers(user),
    )
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Mot de passe actuel incorrect"

    ok = client.put(
        "/api/auth/password",
        json={"currentPassword": PASSWORD, "newPassword": "changed1"},
        headers=headers(user),
    )
    assert ok.status_code == 200
    assert client.post("/api/auth/login", json={"phone": user.phone, "password": "changed1"}).status_code == 200


def test_update_profile_merchant_fields(client, make_user, headers):
    merchant = make_user("merchant")
    response = client.put(
        "/api/auth/profile",
        json={"name": "Nouvelle boutique", "shopName": "Marché Bonapriso", "shopPhone": "+237655555555"},
        headers=headers(merchant),
    )
    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["name"] == "Nouvelle boutique"
    assert user["shopName"] == "Marché Bonapriso"
    assert user["shopPhone"] == "+237655555555"


def test_update_profile_email_conflict(client, make_user, headers):
    make_user("client", email="taken@example.com")
    user = make_user("client")
    response = client.put("/api/auth/profile", json={"email": "taken@example.com"}, headers=headers(user))
    assert response.status_code == 400


def test_addresses_keep_a_single_default(client, make_user, headers):
    user = make_user("client")
    auth = headers(user)

    first = client.post("/api/auth/addresses", json={"fullAddress": "Rue 1", "city": "Douala"}, headers=auth)
    assert first.status_code == 201
    addresses = first.json()["data"]["addresses"]
    assert [a["isDefault"] for a in addresses] == [True]

    second = client.post(
        "/api/auth/addresses", json={"fullAddress": "Rue 2", "city": "Yaoundé", "isDefault": True}, headers=auth
    )
    addresses = second.json()["data"]["addresses"]
    assert [a["isDefault"] for a in addresses] == [False, True]

    first_id = addresses[0]["id"]
    second_id = addresses[1]["id"]
    switched = client.put(f"/api/auth/addresses/{first_id}/default", headers=auth).json()["data"]["addresses"]
    assert [a["isDefault"] for a in switched] == [True, False]

    remaining = client.delete(f"/api/auth/addresses/{first_id}", headers=auth).json()["data"]["addresses"]
    assert len(remaining) == 1
    assert remaining[0]["id"] == second_id
    assert remaining[0]["isDefault"] is True


def test_address_unknown_id(client, make_user, headers):
    user = make_user("client")
    response = client.put("/api/auth/addresses/999/default", headers=headers(user))
    assert response.status_code == 404
    assert response.json()["message"] == "Adresse introuvable"


def test_addresses_are_client_only(client, make_user, headers):
    merchant = make_user("merchant")
    response = client.post(
        "/api/auth/addresses", json={"fullAddress": "Rue 1", "city": "Douala"}, headers=headers(merchant)
    )
    assert response.status_code == 403
    assert response.json()["message"] == "Accès refusé"


def test_fcm_token(client, make_user, headers):
    user = make_user("delivery")
    response = client.post("/api/auth/fcm-token", json={"fcmToken": "abc123"}, headers=headers(user))
    assert response.status_code == 200
    assert response.json()["message"] == "Token FCM mis à jour"


def test_register_blank_email(client):
    for email in ("", "   "):
        response = register(client, email=email)
        assert response.status_code == 400
        assert response.json()["message"] == "L'email est requis"


def test_register_invalid_email(client):
    response = register(client, email="not-an-email")
    assert response.status_code == 400
    assert response.json()["message"] == "Email invalide"
