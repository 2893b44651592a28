"""HTTP client for the admin back-office API.

The session (token plus the logged-in admin) is an explicit object handed to the
client, so several clients can run side by side against different accounts.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
import structlog
from pydantic import TypeAdapter

from app.domain.schemas.order import DashboardStats
from app.domain.schemas.user import UserRead

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 30
_users = TypeAdapter(List[UserRead])
_user = TypeAdapter(UserRead)


class AdminAPIError(Exception):
    """Raised for any non-2xx response or an envelope with success=false."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


@dataclass
class AdminSession:
    token: Optional[str] = None
    user: Optional[Any] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def clear(self) -> None:
        self.token = None
        self.user = None


class AdminAPIClient:
    """Synchronous client over httpx for the ``/api/auth`` and ``/api/admin`` routes."""

    def __init__(
        self,
        base_url: str,
        session: AdminSession,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self._http = httpx.Client(base_url=self.base_url, transport=transport, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "AdminAPIClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the envelope's ``data`` (empty dict when absent)."""
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            response = self._http.request(method, path, json=json, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning("Admin API unreachable", method=method, path=path, error=str(e))
            raise AdminAPIError(0, "Erreur de connexion au serveur") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code == 401:
            # Expired or revoked token: drop the session so the caller logs in again
            self.session.clear()

        if response.is_error or not body.get("success", False):
            message = body.get("message") or response.reason_phrase or "Erreur serveur"
            logger.info("Admin API error", method=method, path=path, status=response.status_code, message=message)
            raise AdminAPIError(response.status_code, message)

        return body.get("data") or {}

    # Auth

    def login(self, phone: str, password: str):
        data = self._request("POST", "/api/auth/login", json={"phone": phone, "password": password})
        user = _user.validate_python(data["user"])
        if user.role != "admin":
            raise AdminAPIError(403, "Accès réservé aux administrateurs")
        self.session.token = data["token"]
        self.session.user = user
        logger.info("Admin logged in", user_id=user.id)
        return user

    def logout(self) -> None:
        self.session.clear()

    def me(self):
        data = self._request("GET", "/api/auth/me")
        self.session.user = _user.validate_python(data["user"])
        return self.session.user

    # Dashboard

    def stats(self) -> DashboardStats:
        return DashboardStats.model_validate(self._request("GET", "/api/admin/stats"))

    # Users

    def list_users(self, role: Optional[str] = None):
        data = self._request("GET", "/api/admin/users", params={"role": role})
        return _users.validate_python(data["users"])

    def get_user(self, user_id: int):
        return _user.validate_python(self._request("GET", f"/api/admin/users/{user_id}")["user"])

    def create_user(self, payload: dict):
        return _user.validate_python(self._request("POST", "/api/admin/users", json=payload)["user"])

    def update_user(self, user_id: int, payload: dict):
        return _user.validate_python(self._request("PUT", f"/api/admin/users/{user_id}", json=payload)["user"])

    def delete_user(self, user_id: int) -> None:
        self._request("DELETE", f"/api/admin/users/{user_id}")

    def toggle_user_status(self, user_id: int):
        data = self._request("PUT", f"/api/admin/users/{user_id}/toggle-status")
        return _user.validate_python(data["user"])

    def list_merchants(self, approved: Optional[bool] = None):
        data = self._request("GET", "/api/admin/merchants", params={"approved": approved})
        return _users.validate_python(data["merchants"])

    def approve_merchant(self, user_id: int):
        data = self._request("PUT", f"/api/admin/merchants/{user_id}/approve")
        return _user.validate_python(data["merchant"])

    def reject_merchant(self, user_id: int):
        data = self._request("PUT", f"/api/admin/merchants/{user_id}/reject")
        return _user.validate_python(data["merchant"])

    def list_delivery_personnel(self):
        return _users.validate_python(self._request("GET", "/api/admin/delivery")["deliveryPersonnel"])

    # Products

    def list_products(
        self,
        status: Optional[str] = None,
        category: Optional[int] = None,
        merchant: Optional[int] = None,
        search: Optional[str] = None,
    ) -> List[dict]:
        params = {"status": status, "category": category, "merchant": merchant, "search": search}
        return self._request("GET", "/api/admin/products", params=params)["products"]

    def get_product(self, product_id: int) -> dict:
        return self._request("GET", f"/api/admin/products/{product_id}")["product"]

    def create_product(self, payload: dict) -> dict:
        return self._request("POST", "/api/admin/products", json=payload)["product"]

    def update_product(self, product_id: int, payload: dict) -> dict:
        return self._request("PUT", f"/api/admin/products/{product_id}", json=payload)["product"]

    def delete_product(self, product_id: int) -> None:
        self._request("DELETE", f"/api/admin/products/{product_id}")

    def approve_product(self, product_id: int) -> dict:
        return self._request("PUT", f"/api/admin/products/{product_id}/approve")["product"]

    def reject_product(self, product_id: int, reason: Optional[str] = None) -> dict:
        body = {"reason": reason} if reason else None
        return self._request("PUT", f"/api/admin/products/{product_id}/reject", json=body)["product"]

    # Categories

    def list_categories(self, active: bool = False) -> List[dict]:
        params = {"active": "true"} if active else None
        return self._request("GET", "/api/admin/categories", params=params)["categories"]

    def create_category(self, payload: dict) -> dict:
        return self._request("POST", "/api/admin/categories", json=payload)["category"]

    def update_category(self, category_id: int, payload: dict) -> dict:
        return self._request("PUT", f"/api/admin/categories/{category_id}", json=payload)["category"]

    def delete_category(self, category_id: int) -> None:
        self._request("DELETE", f"/api/admin/categories/{category_id}")

    def toggle_category_status(self, category_id: int) -> dict:
        return self._request("PUT", f"/api/admin/categories/{category_id}/toggle-status")["category"]

    # Orders

    def list_orders(self, status: Optional[str] = None) -> List[dict]:
        return self._request("GET", "/api/admin/orders", params={"status": status})["orders"]

    def get_order(self, order_id: int) -> dict:
        return self._request("GET", f"/api/admin/orders/{order_id}")["order"]

    def update_order_status(self, order_id: int, status: str, reason: Optional[str] = None) -> dict:
        body = {"status": status}
        if reason:
            body["reason"] = reason
        return self._request("PUT", f"/api/admin/orders/{order_id}/status", json=body)["order"]
