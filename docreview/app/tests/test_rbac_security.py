import pytest

from docreview.app.core.config import settings
from docreview.app.core.errors import ParamsError, PermissionDeniedError
from docreview.app.core.rbac import Principal, Role, check_permission, get_principal, require_roles
from docreview.app.core.security import decode_jwt, encode_jwt

def _principal(authorization=None, x_user_id=None, x_user_role=None):
    return get_principal(authorization=authorization, x_user_id=x_user_id, x_user_role=x_user_role)

def test_check_permission():
    assert check_permission({Role.admin}, Role.admin)
    assert not check_permission({Role.admin}, Role.user)
    assert check_permission({Role.user, Role.admin}, Role.user)
    assert not check_permission({Role.user}, None)
    # no requirement means any caller
    assert check_permission(set(), None)

def test_gate_raises_and_passes_principal_through():
    gate = require_roles(Role.admin)
    admin = Principal(user_id="a1", role=Role.admin)
    assert gate(principal=admin) is admin
    with pytest.raises(PermissionDeniedError):
        gate(principal=Principal(user_id="u1", role=Role.user))

def test_jwt_roundtrip_carries_role():
    claims = decode_jwt(encode_jwt("u1", "USER"))
    assert claims["sub"] == "u1"
    assert claims["role"] == "USER"

def test_principal_from_token_and_headers(monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_HEADER_IDENTITY", True)
    p = _principal(authorization="Bearer " + encode_jwt("a1", "admin"))
    assert p == Principal(user_id="a1", role=Role.admin)
    p = _principal(x_user_id="u1", x_user_role="user")
    assert p == Principal(user_id="u1", role=Role.user)
    assert _principal() == Principal()

def test_principal_rejects_expired_token_and_unknown_role(monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_HEADER_IDENTITY", True)
    with pytest.raises(ParamsError):
        _principal(authorization="Bearer " + encode_jwt("a1", "ADMIN", exp_seconds=-10))
    with pytest.raises(ParamsError):
        _principal(x_user_id="u1", x_user_role="superuser")

def test_identity_headers_ignored_unless_enabled(monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_HEADER_IDENTITY", False)
    assert _principal(x_user_id="a1", x_user_role="ADMIN") == Principal()
    # tokens still work
    p = _principal(authorization="Bearer " + encode_jwt("a1", "ADMIN"))
    assert p.role == Role.admin
