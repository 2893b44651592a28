import json

import httpx
import pytest

from app.client.admin_client import AdminAPIClient, AdminAPIError, AdminSession
from app.domain.schemas.user import AdminRead, MerchantRead

BASE_URL = "http://favela.test"

ADMIN = {
    "id": 1,
    "phone": "+237600000000",
    "name": "Super Admin",
    "email": "admin@favelamarket.com",
    "avatar": None,
    "isActive": True,
    "createdAt": "2024-05-01T10:00:00",
    "role": "admin",
}
MERCHANT = {
    "id": 2,
    "phone": "+237677000001",
    "name": "Paul",
    "isActive": True,
    "role": "merchant",
    "shopName": "Chez Paul",
    "isApproved": False,
}


def make_client(handler, session=None):
    session = session or AdminSession()
    return AdminAPIClient(BASE_URL, session, transport=httpx.MockTransport(handler)), session


def envelope(data=None, message=None, status_code=200, success=True):
    body = {"success": success}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return httpx.Response(status_code, json=body)


def test_login_stores_session():
    def handler(request):
        assert request.url.path == "/api/auth/login"
        assert json.loads(request.content) == {"phone": "+237600000000", "password": "admin123"}
        assert "Authorization" not in request.headers
        return envelope({"token": "jwt-token", "user": ADMIN})

    api, session = make_client(handler)
    user = api.login("+237600000000", "admin123")

    assert isinstance(user, AdminRead)
    assert session.is_authenticated
    assert session.token == "jwt-token"
    assert session.user.name == "Super Admin"


def test_login_refuses_non_admin():
    def handler(request):
        return envelope({"token": "jwt-token", "user": MERCHANT})

    api, session = make_client(handler)
    with pytest.raises(AdminAPIError) as exc:
        api.login("+237677000001", "secret123")

    assert exc.value.status_code == 403
    assert not session.is_authenticated


def test_bearer_token_is_attached():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        seen["params"] = dict(request.url.params)
        return envelope({"users": [ADMIN, MERCHANT]})

    api, _ = make_client(handler, AdminSession(token="abc"))
    users = api.list_users(role="all")

    assert seen == {"auth": "Bearer abc", "params": {"role": "all"}}
    assert isinstance(users[0], AdminRead)
    assert isinstance(users[1], MerchantRead)
    assert users[1].shop_name == "Chez Paul"


def test_none_params_are_dropped():
    def handler(request):
        assert request.url.params.get("status") is None
        return envelope({"orders": []})

    api, _ = make_client(handler, AdminSession(token="abc"))
    assert api.list_orders() == []


def test_unauthorized_clears_session():
    def handler(request):
        return envelope(message="Token expiré", status_code=401, success=False)

    session = AdminSession(token="stale", user=object())
    api, _ = make_client(handler, session)

    with pytest.raises(AdminAPIError) as exc:
        api.stats()

    assert exc.value.status_code == 401
    assert exc.value.message == "Token expiré"
    assert session.token is None
    assert session.user is None


def test_error_message_is_surfaced():
    def handler(request):
        return envelope(
            message="Impossible de supprimer: 3 produit(s) utilisent cette catégorie",
            status_code=400,
            success=False,
        )

    api, session = make_client(handler, AdminSession(token="abc"))
    with pytest.raises(AdminAPIError) as exc:
        api.delete_category(7)

    assert exc.value.status_code == 400
    assert "3 produit(s)" in exc.value.message
    assert session.is_authenticated


def test_stats_are_parsed():
    def handler(request):
        assert request.url.path == "/api/admin/stats"
        return envelope(
            {
                "totalUsers": 10,
                "totalProducts": 4,
                "totalCategories": 2,
                "pendingProducts": 1,
                "pendingMerchants": 3,
                "totalOrders": 5,
                "totalRevenue": 12500.0,
            }
        )

    api, _ = make_client(handler, AdminSession(token="abc"))
    stats = api.stats()
    assert stats.pending_merchants == 3
    assert stats.total_revenue == 12500.0


def test_reject_product_sends_reason():
    def handler(request):
        assert request.method == "PUT"
        assert request.url.path == "/api/admin/products/5/reject"
        assert json.loads(request.content) == {"reason": "Prix incohérent"}
        return envelope({"product": {"id": 5, "status": "rejected"}}, message="Produit rejeté")

    api, _ = make_client(handler, AdminSession(token="abc"))
    assert api.reject_product(5, "Prix incohérent")["status"] == "rejected"


def test_update_order_status():
    def handler(request):
        assert request.url.path == "/api/admin/orders/9/status"
        assert json.loads(request.content) == {"status": "confirmed"}
        return envelope({"order": {"id": 9, "status": "confirmed"}})

    api, _ = make_client(handler, AdminSession(token="abc"))
    assert api.update_order_status(9, "confirmed")["status"] == "confirmed"


def test_connection_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    api, _ = make_client(handler, AdminSession(token="abc"))
    with pytest.raises(AdminAPIError) as exc:
        api.list_categories()
    assert exc.value.status_code == 0


def test_against_running_app(client, admin, make_user):
    # Drive the real application through its ASGI transport
    make_user("merchant", approved=False, shop_name="Chez Paul")
    api = AdminAPIClient("http://testserver", AdminSession(), transport=client._transport)

    api.login(admin.phone, "secret123")
    merchants = api.list_merchants(approved=False)
    assert [m.shop_name for m in merchants] == ["Chez Paul"]

    approved = api.approve_merchant(merchants[0].id)
    assert approved.is_approved is True
    assert api.stats().pending_merchants == 0
