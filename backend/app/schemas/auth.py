from pydantic import BaseModel, Field

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"

class LoginIn(BaseModel):
    login: str
    password: str

class UserCreateIn(BaseModel):
    login: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6, max_length=128)
    role: str
    full_name: str | None = None

class UserOut(BaseModel):
    id: int
    login: str
    full_name: str | None = None
    role: str
