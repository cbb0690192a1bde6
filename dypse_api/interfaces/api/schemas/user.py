"""Account representations returned by the API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr


class RoleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    alias: str


class UserRead(BaseModel):
    """Public view of an account; the password hash never leaves the server."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    role: RoleRead
    first_name: str
    last_name: str
    full_name: str
    email: EmailStr
    phone: str | None = None
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
