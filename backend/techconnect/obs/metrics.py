"""Central registry for Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Histogram


REQUEST_COUNTER = Counter(
	"techconnect_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"techconnect_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

ANNOUNCEMENT_OPS = Counter(
	"techconnect_announcement_ops_total",
	"Announcement store operations by club, operation and outcome",
	["club", "op", "outcome"],
)

AUTHZ_DENIED = Counter(
	"techconnect_authz_denied_total",
	"Requests rejected because the caller role did not match the club",
	["club"],
)

IDENTITY_REJECTS = Counter(
	"techconnect_identity_rejects_total",
	"Identity operations rejected by reason",
	["reason"],
)

LOGINS = Counter(
	"techconnect_identity_logins_total",
	"Successful logins by role",
	["role"],
)


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def inc_announcement_op(club: str, op: str, outcome: str = "ok") -> None:
	ANNOUNCEMENT_OPS.labels(club=club, op=op, outcome=outcome).inc()


def inc_authz_denied(club: str) -> None:
	AUTHZ_DENIED.labels(club=club).inc()


def inc_identity_reject(reason: str) -> None:
	IDENTITY_REJECTS.labels(reason=reason).inc()


def inc_login(role: str) -> None:
	LOGINS.labels(role=role).inc()
