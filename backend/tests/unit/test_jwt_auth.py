import time

import jwt
import pytest
from fastapi import HTTPException

from techconnect.domain.identity.models import Role
from techconnect.infra import jwt as jwt_helper
from techconnect.infra.auth import AuthenticatedUser, require_club_role, verify_access_jwt
from techconnect.settings import settings


def _token(**claims):
    body = {"sub": "u-1", "role": "iet"}
    body.update(claims)
    return jwt_helper.encode_access(body, ttl_seconds=300)


def test_verify_access_jwt_returns_user():
    user = verify_access_jwt(_token(name="Asha", email="asha@college.edu"))
    assert user.id == "u-1"
    assert user.role is Role.IET
    assert user.email == "asha@college.edu"


def test_expired_token_is_rejected():
    token = jwt_helper.encode_access({"sub": "u-1", "role": "iet"}, ttl_seconds=-60)
    with pytest.raises(HTTPException) as excinfo:
        verify_access_jwt(token)
    assert excinfo.value.status_code == 401
    assert excinfo.value.detail == "invalid_token"


def test_wrong_secret_is_rejected():
    now = int(time.time())
    forged = jwt.encode(
        {"sub": "u-1", "role": "iet", "iss": jwt_helper.ISSUER, "aud": jwt_helper.AUDIENCE, "iat": now, "exp": now + 60},
        settings.secret_key + "-other",
        algorithm="HS256",
    )
    with pytest.raises(HTTPException):
        verify_access_jwt(forged)


def test_wrong_audience_is_rejected():
    now = int(time.time())
    token = jwt.encode(
        {"sub": "u-1", "role": "iet", "iss": jwt_helper.ISSUER, "aud": "someone-else", "iat": now, "exp": now + 60},
        settings.secret_key,
        algorithm="HS256",
    )
    with pytest.raises(HTTPException):
        verify_access_jwt(token)


@pytest.mark.parametrize("claims", [{"role": "superuser"}, {"role": ""}, {"sub": ""}])
def test_bad_claims_are_rejected(claims):
    with pytest.raises(HTTPException) as excinfo:
        verify_access_jwt(_token(**claims))
    assert excinfo.value.status_code == 401


def test_require_club_role_refuses_non_club():
    with pytest.raises(ValueError):
        require_club_role(Role.ADMIN)


@pytest.mark.asyncio
async def test_require_club_role_dependency():
    guard = require_club_role(Role.IEEE)
    member = AuthenticatedUser(id="u-1", role=Role.IEEE)
    assert await guard(member) is member

    with pytest.raises(HTTPException) as excinfo:
        await guard(AuthenticatedUser(id="u-2", role=Role.ADMIN))
    assert excinfo.value.status_code == 403
