"""Pydantic schemas for signup, login and the current user."""
from pydantic import BaseModel


# Fields are optional so missing values reach the service and come back as 400
class SignupSchema(BaseModel):
    username: str | None = None
    password: str | None = None
    email: str | None = None


class LoginSchema(BaseModel):
    username: str | None = None
    password: str | None = None


class UserSummarySchema(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True


class UserOutSchema(BaseModel):
    id: int
    username: str
    email: str | None = None

    class Config:
        from_attributes = True


class SignupOutSchema(BaseModel):
    message: str
    user: UserSummarySchema


class LoginOutSchema(BaseModel):
    ok: bool
    user: UserOutSchema


class MeOutSchema(BaseModel):
    user: UserOutSchema
