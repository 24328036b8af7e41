"""HTTP client for the portal API.

Attaches the session's bearer credential to every call and turns HTTP and
transport failures into typed client errors.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from techconnect.client.session import SessionContext
from techconnect.domain.identity.models import Role

log = logging.getLogger(__name__)


class ClientError(Exception):
	"""Base class for every failure surfaced to a view."""

	def __init__(self, message: str):
		super().__init__(message)
		self.message = message


class NetworkError(ClientError):
	"""Transport failure; the server never answered."""


class ApiError(ClientError):
	def __init__(self, status_code: int, detail: Any):
		super().__init__(str(detail))
		self.status_code = status_code
		self.detail = detail


class Unauthenticated(ApiError):
	pass


class Forbidden(ApiError):
	pass


class NotFound(ApiError):
	pass


class ValidationFailed(ApiError):
	pass


_ERRORS_BY_STATUS = {
	401: Unauthenticated,
	403: Forbidden,
	404: NotFound,
	409: ValidationFailed,
	422: ValidationFailed,
}


def _error_for(response: httpx.Response) -> ApiError:
	try:
		body = response.json()
	except ValueError:
		body = None
	if isinstance(body, dict):
		detail = body.get("detail", response.reason_phrase)
	else:
		detail = response.text or response.reason_phrase
	error_cls = _ERRORS_BY_STATUS.get(response.status_code, ApiError)
	return error_cls(response.status_code, detail)


class PortalClient:
	def __init__(
		self,
		base_url: str,
		session: SessionContext,
		*,
		timeout: float = 10.0,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	):
		self.session = session
		self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

	async def __aenter__(self) -> "PortalClient":
		return self

	async def __aexit__(self, *exc_info) -> None:
		await self.aclose()

	async def aclose(self) -> None:
		await self._http.aclose()

	def _headers(self) -> Dict[str, str]:
		if not self.session.token:
			return {}
		return {"Authorization": f"Bearer {self.session.token}"}

	async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
		try:
			response = await self._http.request(method, path, headers=self._headers(), **kwargs)
		except httpx.TransportError as exc:
			log.error("client.network_error", extra={"method": method, "path": path})
			raise NetworkError(f"network_error: {exc}") from exc
		if response.status_code >= 400:
			error = _error_for(response)
			log.warning(
				"client.api_error",
				extra={"method": method, "path": path, "status": response.status_code},
			)
			raise error
		return response

	async def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
		response = await self._request(
			"POST", "/api/auth/register", json={"name": name, "email": email, "password": password}
		)
		return response.json()

	async def login(self, email: str, password: str) -> Dict[str, Any]:
		response = await self._request("POST", "/api/auth/login", json={"email": email, "password": password})
		payload = response.json()
		self.session.establish(payload)
		return payload

	def logout(self) -> None:
		self.session.invalidate()

	async def list_announcements(self, club: Role | str) -> List[Dict[str, Any]]:
		club = Role.parse(club)
		response = await self._request("GET", f"/api/{club.value}/get")
		return response.json()

	async def add_announcement(self, club: Role | str, title: str, message: str) -> Dict[str, Any]:
		club = Role.parse(club)
		response = await self._request("POST", f"/api/{club.value}/add", json={"title": title, "message": message})
		return response.json()

	async def delete_announcement(self, club: Role | str, announcement_id: str) -> None:
		club = Role.parse(club)
		await self._request("DELETE", f"/api/{club.value}/delete/{announcement_id}")
