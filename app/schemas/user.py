"""Pydantic schemas for user records."""
from pydantic import AliasChoices, BaseModel, Field


class UserInSchema(BaseModel):
    """Body of create/update. Both fields optional; `name`/`email` accepted as aliases."""

    nombre: str | None = Field(default=None, validation_alias=AliasChoices("nombre", "name"))
    correo: str | None = Field(default=None, validation_alias=AliasChoices("correo", "email"))

    class Config:
        extra = "ignore"


class UserOutSchema(BaseModel):
    id: int
    nombre: str | None = None
    correo: str | None = None

    class Config:
        from_attributes = True


class MessageSchema(BaseModel):
    message: str


class ErrorSchema(BaseModel):
    error: str
