from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.schemas.common import PartialUpdate

class LanguageCreate(BaseModel):
    code: str = Field(min_length=2, max_length=5)
    name: str = Field(min_length=1)
    native_name: str = Field(min_length=1)
    is_active: bool = True
    is_default: bool = False

class LanguageUpdate(PartialUpdate):
    code: Optional[str] = Field(default=None, min_length=2, max_length=5)
    name: Optional[str] = Field(default=None, min_length=1)
    native_name: Optional[str] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None

class Language(BaseModel):
    id: int
    code: str
    name: str
    native_name: str
    is_active: bool
    is_default: bool
    created_at: datetime

    class Config:
        from_attributes = True
