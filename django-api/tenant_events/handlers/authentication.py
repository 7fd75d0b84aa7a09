"""Tenant identity from gateway headers.

Identity is resolved upstream; this service trusts the headers the gateway
sets and only checks that a tenant is present.
"""

from dataclasses import dataclass

from rest_framework import authentication, exceptions
from rest_framework.request import Request

from tenant_events.domain import TenantContext

TENANT_HEADER = "X-Tenant-Id"
USER_HEADER = "X-User-Id"
ROLES_HEADER = "X-User-Roles"


@dataclass(frozen=True)
class TenantUser:
    """Request user for a gateway-authenticated caller."""

    context: TenantContext

    is_authenticated = True
    is_anonymous = False

    @property
    def pk(self) -> str | None:
        return self.context.user_id


class TenantHeaderAuthentication(authentication.BaseAuthentication):
    def authenticate(self, request: Request) -> tuple[TenantUser, TenantContext] | None:
        tenant_id = request.headers.get(TENANT_HEADER)
        if tenant_id is None:
            return None
        tenant_id = tenant_id.strip()
        if not tenant_id:
            raise exceptions.AuthenticationFailed(f"{TENANT_HEADER} must not be blank")

        user_id = (request.headers.get(USER_HEADER) or "").strip() or None
        roles = tuple(
            role.strip()
            for role in (request.headers.get(ROLES_HEADER) or "").split(",")
            if role.strip()
        )
        context = TenantContext(tenant_id=tenant_id, user_id=user_id, roles=roles)
        return TenantUser(context), context

    def authenticate_header(self, request: Request) -> str:
        return TENANT_HEADER
