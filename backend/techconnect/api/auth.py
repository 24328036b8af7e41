"""Authentication API endpoints: register, login, and current identity."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from techconnect.api.request_id import get_request_id
from techconnect.domain.identity import policy, schemas, service
from techconnect.infra import rate_limit
from techconnect.infra.auth import AuthenticatedUser, get_current_user
from techconnect.obs import metrics as obs_metrics
from techconnect.settings import settings

router = APIRouter(prefix="/api/auth")


def _client_ip(request: Request) -> str:
	client = request.client
	return client.host if client else "unknown"


def _raise(detail: str, status_code: int) -> None:
	"""Raise an HTTP error with request id header attached."""
	raise HTTPException(status_code=status_code, detail=detail, headers={"X-Request-Id": get_request_id()})


def _map_policy_error(exc: policy.IdentityPolicyError) -> HTTPException:
	obs_metrics.inc_identity_reject(exc.reason)
	if isinstance(exc, policy.EmailConflict):
		return HTTPException(status.HTTP_409_CONFLICT, detail=exc.reason)
	return HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.reason)


@router.post("/register", response_model=schemas.UserOut, status_code=status.HTTP_201_CREATED)
async def register(payload: schemas.RegisterRequest, request: Request, response: Response) -> schemas.UserOut:
	ip = _client_ip(request)
	if not await rate_limit.allow("register:ip", ip, limit=settings.register_per_minute_ip, window_seconds=60):
		_raise("rate_limited_ip", status.HTTP_429_TOO_MANY_REQUESTS)
	try:
		res = await service.register(payload)
	except policy.IdentityPolicyError as exc:
		raise _map_policy_error(exc) from None
	response.headers["X-Request-Id"] = get_request_id(request)
	return res


@router.post("/login", response_model=schemas.LoginResponse)
async def login(payload: schemas.LoginRequest, request: Request, response: Response) -> schemas.LoginResponse:
	ip = _client_ip(request)
	ident = policy.normalise_email(payload.email)
	if not await rate_limit.allow("login:ip", ip, limit=settings.login_per_minute_ip, window_seconds=60):
		_raise("rate_limited_ip", status.HTTP_429_TOO_MANY_REQUESTS)
	if not await rate_limit.allow("login:id", ident, limit=settings.login_per_minute_email, window_seconds=60):
		_raise("rate_limited_id", status.HTTP_429_TOO_MANY_REQUESTS)
	try:
		res = await service.login(payload)
	except service.LoginFailed as exc:
		obs_metrics.inc_identity_reject(exc.reason)
		_raise(exc.reason, exc.status_code)
	obs_metrics.inc_login(res.role.value)
	response.headers["X-Request-Id"] = get_request_id(request)
	return res


@router.get("/me", response_model=schemas.UserOut)
async def me(auth_user: AuthenticatedUser = Depends(get_current_user)) -> schemas.UserOut:
	try:
		return await service.get_user(auth_user.id)
	except service.UserNotFound as exc:
		# Token outlived its account
		raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="invalid_token") from exc
