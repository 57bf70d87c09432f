"""Account member models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import MemberStatus
from .role import AccountRole


class MemberUser(BaseModel):
    id: str | None = None
    email: str
    first_name: str | None = None
    last_name: str | None = None
    two_factor_authentication_enabled: bool = False

    model_config = ConfigDict(frozen=True)


class AccountMember(BaseModel):
    id: str = Field(..., min_length=1)
    status: MemberStatus
    user: MemberUser
    roles: list[AccountRole] = []

    model_config = ConfigDict(frozen=True)


class AddMemberRequest(BaseModel):
    email: str = Field(..., min_length=3)
    role_ids: list[str] = Field(..., min_length=1)
    status: MemberStatus | None = None

    def to_body(self) -> dict[str, object]:
        body: dict[str, object] = {"email": self.email, "roles": list(self.role_ids)}
        if self.status is not None:
            body["status"] = self.status.value
        return body
