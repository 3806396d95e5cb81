from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class ContentUpsert(BaseModel):
    page: str = Field(min_length=1)
    section: str = Field(min_length=1)
    key: str = Field(min_length=1)
    language_code: str = Field(min_length=2, max_length=5)
    content: str = Field(min_length=1)

class ContentUpdate(BaseModel):
    content: str = Field(min_length=1)

class Translation(BaseModel):
    language_code: str = Field(min_length=2, max_length=5)
    content: str = Field(min_length=1)

class BulkContentUpsert(BaseModel):
    page: str = Field(min_length=1)
    section: str = Field(min_length=1)
    key: str = Field(min_length=1)
    translations: List[Translation] = Field(min_length=1)

class ContentItem(BaseModel):
    id: int
    page: str
    section: str
    key: str
    language_code: str
    content: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class Page(BaseModel):
    id: int
    slug: str
    title: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ContentStructureEntry(BaseModel):
    section: str
    key: str
