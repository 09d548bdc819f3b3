"""
Esquemas Pydantic para operaciones de autenticación.

- Mantiene las validaciones y normalizaciones (p. ej. email en minúsculas).
- Modelos pensados para separar la capa API de la lógica de negocio.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator


class RegisterPayload(BaseModel):
    username: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: EmailStr) -> str:
        return str(v).lower()

    @field_validator("username")
    @classmethod
    def _strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username vacío")
        return v


class LoginPayload(BaseModel):
    # str simple: un email mal formado no es 422, simplemente no existe (404)
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.strip().lower()


# === Response models ===

class UserSummary(BaseModel):
    """Respuesta pública de usuario (sin secretos)."""
    id: str
    username: str
    email: EmailStr
    created_at: str


class RegisterOut(BaseModel):
    message: str
    user: UserSummary


class LoginOut(BaseModel):
    message: str
    token: str


class ErrorOut(BaseModel):
    error: str
