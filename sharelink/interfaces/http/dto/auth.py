from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("username", "email")
    @classmethod
    def strip_value(cls, value: str) -> str:
        return value.strip()

    @field_validator("email")
    @classmethod
    def validate_email_shape(cls, value: str) -> str:
        local, _, domain = value.partition("@")
        if not local or "." not in domain:
            raise ValueError("Email must look like name@domain.tld")
        return value.lower()


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)


class UserDTO(BaseModel):
    id: str
    username: str
    email: str


class AuthSuccessDTO(BaseModel):
    token: str
    user: UserDTO
