from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from debtsys.models.schemas.base import WireModel


class User(WireModel):
    email: EmailStr
    name: str
    salary: float = Field(default=0, ge=0)
    savings: float = 0
    active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Session(BaseModel):
    """Who the calls are made for; replaces a hardcoded default user."""

    model_config = {"frozen": True}

    user_email: EmailStr
