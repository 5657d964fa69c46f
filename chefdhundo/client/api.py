"""
HTTP client for the Chef Dhundo API.

Failures surface as ``ApiError`` carrying the backend's free-text detail.
A 401 raises ``UnauthorizedError`` so callers can clear state instead of
reporting an error.
"""
import logging
from typing import Any, Dict, Optional
import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class ApiError(Exception):
    def __init__(self, status_code: Optional[int], detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class UnauthorizedError(ApiError):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(401, detail)


class NetworkError(ApiError):
    """The request never got an HTTP response."""

    def __init__(self, detail: str):
        super().__init__(None, detail)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Request failed with status {response.status_code}"

    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error") or body.get("message")
        if isinstance(detail, str):
            return detail
        if detail:
            # FastAPI validation errors arrive as a list
            return str(detail)
    return f"Request failed with status {response.status_code}"


def parse_response(response: httpx.Response) -> Any:
    if response.status_code == 401:
        raise UnauthorizedError(_error_detail(response))
    if response.status_code >= 400:
        raise ApiError(response.status_code, _error_detail(response))

    if "application/json" not in response.headers.get("content-type", ""):
        return response.text

    body = response.json()
    if isinstance(body, dict) and body.get("success") is False:
        raise ApiError(response.status_code, body.get("message") or body.get("error") or "Request failed")
    return body


def _params(**values) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


class ChefDhundoClient:
    """
    Synchronous API client.

    Args:
        base_url: API root, ignored when ``http_client`` is given
        token: Bearer token issued by the identity provider
        http_client: Pre-built ``httpx.Client`` (for example a FastAPI TestClient)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.token = token
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._http.close()

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._http.request(method, path, headers=self._headers(), **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise NetworkError(str(e)) from e
        return parse_response(response)

    # Resumes
    def list_resumes(self, page: int = 1, limit: int = 12, search: str = "", experience: str = "all", profession: str = "all") -> dict:
        params = _params(page=page, limit=limit, search=search or None, experience=experience, profession=profession)
        return self.request("GET", "/api/resumes", params=params)

    def list_all_resumes(self) -> dict:
        return self.request("GET", "/api/resumes")

    def get_resume(self, resume_id: int) -> dict:
        return self.request("GET", f"/api/resumes/{resume_id}")["data"]

    def create_resume(self, data: dict) -> dict:
        return self.request("POST", "/api/resumes", json=data)["data"]

    def update_resume(self, resume_id: int, data: dict) -> dict:
        return self.request("PUT", f"/api/resumes/{resume_id}", json=data)["data"]

    def delete_resume(self, resume_id: int) -> dict:
        return self.request("DELETE", f"/api/resumes/{resume_id}")

    # Users
    def get_current_user(self) -> dict:
        return self.request("GET", "/api/users/me")["data"]

    def update_profile(self, name: Optional[str] = None, photo: Optional[str] = None) -> dict:
        payload = _params(name=name, photo=photo)
        return self.request("PUT", "/api/users/me", json=payload)["data"]

    def sync_user(self, email: str, name: Optional[str] = None, photo: Optional[str] = None) -> dict:
        payload = _params(email=email, name=name, photo=photo)
        return self.request("POST", "/api/users/sync", json=payload)["data"]

    # Admin
    def list_users(self) -> list:
        return self.request("GET", "/api/admin/users")["data"]

    def update_user_role(self, user_id: int, role: str) -> dict:
        payload = {"targetUserId": user_id, "newRole": role}
        return self.request("PATCH", "/api/admin/users/role", json=payload)["data"]

    def update_chef_status(self, user_id: int, chef: str) -> dict:
        payload = {"userId": user_id, "chef": chef}
        return self.request("PATCH", "/api/admin/users/chef-status", json=payload)["data"]

    def delete_user(self, user_id: int) -> dict:
        return self.request("DELETE", f"/api/admin/users/{user_id}")

    def set_resume_verification(self, resume_id: int, verified: bool) -> dict:
        payload = {"verified": verified}
        return self.request("PATCH", f"/api/admin/resumes/{resume_id}/verification", json=payload)["data"]

    # Announcements
    def list_announcements(self, active: bool = False) -> list:
        return self.request("GET", "/api/announcements", params={"active": str(active).lower()})["data"]

    # Payments
    def create_order(self, amount: float, plan_id: str, plan_name: str, plan_duration_days: int = 30) -> dict:
        payload = {
            "amount": amount,
            "plan_id": plan_id,
            "plan_name": plan_name,
            "plan_duration_days": plan_duration_days,
        }
        return self.request("POST", "/api/payment/orders", json=payload)

    def get_payment_status(self, order_id: str) -> dict:
        return self.request("GET", "/api/payment/status", params={"order_id": order_id})


class AsyncChefDhundoClient:
    """Async counterpart used by long-running flows such as payment polling."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.token = token
        self._http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    async def request(self, method: str, path: str, **kwargs) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            response = await self._http.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise NetworkError(str(e)) from e
        return parse_response(response)

    async def get_payment_status(self, order_id: str) -> dict:
        return await self.request("GET", "/api/payment/status", params={"order_id": order_id})

    async def verify_payment(self, order_id: str) -> dict:
        return await self.request("POST", "/api/payment/verify", json={"order_id": order_id})

    async def list_resumes(self, page: int = 1, limit: int = 12, search: str = "", experience: str = "all", profession: str = "all") -> dict:
        params = _params(page=page, limit=limit, search=search or None, experience=experience, profession=profession)
        return await self.request("GET", "/api/resumes", params=params)
