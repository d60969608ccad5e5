from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, Iterable, Optional

import jwt
from fastapi import Depends, Header

from docreview.app.core.config import settings
from docreview.app.core.errors import ParamsError, PermissionDeniedError
from docreview.app.core.security import decode_jwt

log = logging.getLogger(__name__)

class Role(str, Enum):
    admin = "ADMIN"
    user = "USER"

@dataclass(frozen=True)
class Principal:
    """Who is calling, as attached by upstream authentication. Either field may be unknown."""
    user_id: Optional[str] = None
    role: Optional[Role] = None

def _parse_role(raw: Optional[str]) -> Optional[Role]:
    if raw is None:
        return None
    try:
        return Role(str(raw).upper())
    except ValueError:
        raise ParamsError("Invalid role")

def get_principal(
    authorization: Optional[str] = Header(default=None),
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Principal:
    # Bearer token wins over the local testing headers
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1]
        try:
            claims = decode_jwt(token)
        except jwt.PyJWTError:
            raise ParamsError("Invalid token")
        return Principal(user_id=claims.get("sub"), role=_parse_role(claims.get("role")))
    if settings.ALLOW_HEADER_IDENTITY and (x_user_id or x_user_role):
        return Principal(user_id=x_user_id, role=_parse_role(x_user_role))
    return Principal()

def check_permission(required: Iterable[Role], role: Optional[Role]) -> bool:
    """An empty requirement admits anyone; otherwise the caller's role must be listed."""
    required = frozenset(required)
    if not required:
        return True
    return role is not None and role in required

def require_roles(*roles: Role) -> Callable[..., Principal]:
    required: FrozenSet[Role] = frozenset(roles)

    def gate(principal: Principal = Depends(get_principal)) -> Principal:
        if not check_permission(required, principal.role):
            log.warning(
                "permission denied",
                extra={"user_id": principal.user_id, "role": principal.role.value if principal.role else None},
            )
            raise PermissionDeniedError()
        return principal

    return gate

RequireAdmin = Depends(require_roles(Role.admin))
RequireUser = Depends(require_roles(Role.user))
RequireUserOrAdmin = Depends(require_roles(Role.user, Role.admin))
RequireAnyone = Depends(require_roles())
