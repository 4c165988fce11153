"""ZaiBoost API client.

A thin wrapper around the ZaiBoost HTTP API for scripts, bots and admin
tooling.  It uses the ``requests`` library internally.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is empty or ``None`` and ``error`` is a
dictionary with ``status_code`` and ``message`` keys.  Network problems
are reported the same way with ``status_code`` set to ``None``, so
callers never need to catch ``requests`` exceptions.

:meth:`ZaiBoostAPI.login` and :meth:`ZaiBoostAPI.register` store the
returned token on the client; later calls send it as a bearer token.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class ZaiBoostAPI:
    """Client for the ZaiBoost order API."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000/api/v1",
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``).
            path: Path relative to :attr:`base_url` (e.g. ``/orders``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("error") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str, params: Dict[str, Any] | None = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path, params=params)
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def register(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a customer account and keep its token."""
        return self._authenticate("/auth/register", username, password)

    def login(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Sign in and keep the returned token."""
        return self._authenticate("/auth/login", username, password)

    def _authenticate(self, path: str, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("POST", path, json_body={"username": username, "password": password})
        if error:
            return None, error
        self.token = data.get("token")
        return data, None

    # ------------------------------------------------------------------
    # Catalog and reviews
    # ------------------------------------------------------------------
    def list_services(self, game: Optional[str] = None, category: Optional[str] = None):
        params = {k: v for k, v in (("game", game), ("category", category)) if v}
        return self._list("/services", params=params or None)

    def list_reviews(self):
        return self._list("/reviews")

    def create_review(self, rating: int, comment: str, order_id: Optional[int] = None):
        body: Dict[str, Any] = {"rating": rating, "comment": comment}
        if order_id is not None:
            body["order_id"] = order_id
        return self._request("POST", "/reviews", json_body=body)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def create_order(self, payload: Dict[str, Any]):
        """Place an order.  ``payload`` follows the ``POST /orders`` body."""
        return self._request("POST", "/orders", json_body=payload)

    def list_user_orders(self, user_id: int):
        return self._list(f"/orders/user/{user_id}")

    def list_all_orders(self):
        """Admin only: every order with decrypted game passwords."""
        return self._list("/orders/admin")

    def update_order(self, order_id: int, status: Optional[str] = None, current_value: Optional[int] = None):
        """Admin only: change status and/or progress of an order."""
        body: Dict[str, Any] = {}
        if status is not None:
            body["status"] = status
        if current_value is not None:
            body["current_value"] = current_value
        return self._request("PATCH", f"/orders/{order_id}", json_body=body)

    # ------------------------------------------------------------------
    # Admin and health
    # ------------------------------------------------------------------
    def get_stats(self):
        return self._request("GET", "/admin/stats")

    def health(self):
        return self._request("GET", "/health")
