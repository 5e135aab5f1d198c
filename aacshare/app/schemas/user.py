# aacshare/app/schemas/user.py
from pydantic import BaseModel, Field


# Request body for /auth/sign-up
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class SignInInput(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RefreshInput(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class IdResponse(BaseModel):
    id: int


class StatusResponse(BaseModel):
    status: str = "ok"


# Returned by sign-in and refresh
class TokenPair(BaseModel):
    token: str
    refresh_token: str


# Decoded access token claims
class TokenPayload(BaseModel):
    sub: int
