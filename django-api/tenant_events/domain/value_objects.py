"""Domain primitives that enforce validity at creation time."""

import re
import secrets
import time
from dataclasses import dataclass
from typing import Self

IDENTIFIER_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


@dataclass(frozen=True)
class EntityId:
    """Structured identifier: 24 hex characters, stored lowercase."""

    value: str

    def __post_init__(self) -> None:
        if not self.is_valid(self.value):
            raise ValueError(f"Invalid identifier: {self.value!r}")
        object.__setattr__(self, "value", self.value.lower())

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value)

    @classmethod
    def generate(cls) -> Self:
        # 4 bytes of seconds since epoch followed by 8 random bytes
        return cls(value=f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}")

    @staticmethod
    def is_valid(value: object) -> bool:
        return isinstance(value, str) and IDENTIFIER_PATTERN.fullmatch(value) is not None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TenantContext:
    """Authenticated caller as resolved by the identity collaborator."""

    tenant_id: str
    user_id: str | None = None
    roles: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.tenant_id, str) or not self.tenant_id.strip():
            raise ValueError("Tenant context requires a tenant id")


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size, both strictly positive."""

    page: int = 1
    limit: int = 10

    def __post_init__(self) -> None:
        for name in ("page", "limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be an integer >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
