from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ContactPayload(BaseModel):
    """Raw contact form body.

    Fields are optional and non-string values read as missing, so presence
    is checked by the handler after the rate limit has been applied.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None
    message: str | None = None

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def drop_non_strings(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class ContactResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
