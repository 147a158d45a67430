from __future__ import annotations

from pydantic import Field, model_validator

from clubfinance.schemas.common import CamelModel, MemberRole


class LoginRequest(CamelModel):
    nickname: str = Field(..., min_length=1, max_length=60)
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    role: MemberRole
    requires_password_change: bool


class SessionOut(CamelModel):
    id: int
    display_name: str
    nickname: str
    position: str | None = None
    role: MemberRole
    requires_password_change: bool


class PasswordChangeRequest(CamelModel):
    new_password: str
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordChangeRequest":
        if self.new_password.strip() != self.confirm_password.strip():
            raise ValueError("Passwords do not match.")
        return self


class RouteResolution(CamelModel):
    path: str
    destination: str
    allowed: bool


class NavigationItem(CamelModel):
    name: str
    href: str
