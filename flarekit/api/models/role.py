"""Account role models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PermissionGrant(BaseModel):
    read: bool = False
    write: bool = False

    model_config = ConfigDict(frozen=True)


class AccountRole(BaseModel):
    """A role that can be assigned to account members."""

    id: str
    name: str
    description: str = ""
    permissions: dict[str, PermissionGrant] = {}

    model_config = ConfigDict(frozen=True)

    def can_read(self, scope: str) -> bool:
        grant = self.permissions.get(scope)
        return bool(grant and grant.read)

    def can_write(self, scope: str) -> bool:
        grant = self.permissions.get(scope)
        return bool(grant and grant.write)
