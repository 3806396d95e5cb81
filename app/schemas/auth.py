from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=6)

class UserInfo(BaseModel):
    id: int
    username: str
    email: str
    role: str
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True

class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6)
    role: str = Field(default="user", pattern="^(admin|user)$")

class UserListItem(UserInfo):
    created_at: datetime

class TokenResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    user: UserInfo
