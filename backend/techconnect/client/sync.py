"""Announcement view state machine.

A view mutates its local list optimistically, sends the request, then re-fetches
the club's list and replaces local state with the server's answer::

    IDLE -> SUBMITTING -> RECONCILING -> IDLE
    IDLE -> SUBMITTING -> FAILED

Only one operation may be in flight per view; a second one raises
``OperationInFlight`` instead of racing the first one's re-fetch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from techconnect.client.api import ClientError, Forbidden, PortalClient, Unauthenticated
from techconnect.client.session import SessionContext
from techconnect.domain.identity.models import Role
from techconnect.domain.identity.rbac import authorize

log = logging.getLogger(__name__)


class ViewState(str, Enum):
	IDLE = "idle"
	SUBMITTING = "submitting"
	RECONCILING = "reconciling"
	FAILED = "failed"


class Destination(str, Enum):
	LOGIN = "/login"
	HOME = "/home"


@dataclass(frozen=True)
class Redirect:
	to: Destination
	reason: str


class OperationInFlight(RuntimeError):
	"""Raised when a view is asked to start a second concurrent operation."""


class ReadOnlyView(RuntimeError):
	"""Raised when a mutation is attempted on a view mounted read-only."""


class AnnouncementView:
	def __init__(
		self,
		club: Role | str,
		client: PortalClient,
		session: SessionContext,
		*,
		read_only: bool = False,
	):
		self.club = Role.parse(club)
		# Non-members may mount a read-only view when the server allows any caller to read.
		self.read_only = read_only
		self.client = client
		self.session = session
		self.state = ViewState.IDLE
		self.items: List[Dict[str, Any]] = []
		self.error: Optional[str] = None
		self.redirect: Optional[Redirect] = None
		self._confirmed: List[Dict[str, Any]] = []

	@property
	def busy(self) -> bool:
		return self.state in (ViewState.SUBMITTING, ViewState.RECONCILING)

	def _begin(self, state: ViewState) -> None:
		# Check-and-set happens before any await, so it cannot interleave.
		if self.busy:
			raise OperationInFlight(f"{self.club.value}: {self.state.value}")
		self.state = state
		self.error = None

	def _go(self, to: Destination, reason: str) -> Redirect:
		self.redirect = Redirect(to=to, reason=reason)
		log.info("view.redirect", extra={"club": self.club.value, "to": to.value, "reason": reason})
		return self.redirect

	def _fail(self, exc: ClientError) -> None:
		self.state = ViewState.FAILED
		self.error = exc.message
		log.error("view.operation_failed", extra={"club": self.club.value, "error": exc.message})
		if isinstance(exc, Unauthenticated):
			self.session.invalidate()
			self._go(Destination.LOGIN, "invalid_credential")
		elif isinstance(exc, Forbidden):
			self._go(Destination.HOME, "wrong_role")

	def _reconciled(self, fresh: List[Dict[str, Any]]) -> None:
		self._confirmed = list(fresh)
		self.items = list(fresh)
		self.state = ViewState.IDLE

	async def mount(self) -> Optional[Redirect]:
		"""Gate the view on the session, then load the list.

		Returns a redirect when the caller must leave the view; no request is
		sent in that case.

		A ``read_only`` view skips the local role check and leaves the read
		decision to the server, which answers 403 under the ``club`` policy.
		"""
		if not self.session.is_usable():
			self.session.invalidate()
			return self._go(Destination.LOGIN, "no_credential")
		if not self.read_only and not authorize(self.club, self.session.role):
			return self._go(Destination.HOME, "wrong_role")
		await self.refresh()
		return self.redirect

	async def refresh(self) -> bool:
		self._begin(ViewState.RECONCILING)
		try:
			fresh = await self.client.list_announcements(self.club)
		except ClientError as exc:
			self._fail(exc)
			return False
		self._reconciled(fresh)
		return True

	async def _mutate(
		self,
		optimistic: List[Dict[str, Any]],
		request: Callable[[], Awaitable[Any]],
	) -> bool:
		if self.read_only:
			raise ReadOnlyView(self.club.value)
		self._begin(ViewState.SUBMITTING)
		self.items = optimistic
		try:
			await request()
		except ClientError as exc:
			# The server never applied the change: fall back to what it last confirmed.
			self.items = list(self._confirmed)
			self._fail(exc)
			return False

		self.state = ViewState.RECONCILING
		try:
			fresh = await self.client.list_announcements(self.club)
		except ClientError as exc:
			# The change was applied; keep the optimistic list until the next refresh.
			self._fail(exc)
			return False
		self._reconciled(fresh)
		return True

	async def submit(self, title: str, message: str) -> bool:
		pending = {"id": None, "title": title, "message": message, "pending": True}
		return await self._mutate(
			[*self.items, pending],
			lambda: self.client.add_announcement(self.club, title, message),
		)

	async def remove(self, announcement_id: str) -> bool:
		remaining = [item for item in self.items if str(item.get("id")) != str(announcement_id)]
		return await self._mutate(
			remaining,
			lambda: self.client.delete_announcement(self.club, announcement_id),
		)
