from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime
from app.schemas.common import PartialUpdate

QuestionType = Literal["text", "media"]

class QuizCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None

class QuizUpdate(PartialUpdate):
    nullable_fields = frozenset({"description"})

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None

class QuizListItem(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    is_active: bool
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class QuestionContentIn(BaseModel):
    language_code: str = Field(min_length=1)
    question_text: str = Field(min_length=1)
    media_url: Optional[str] = None
    explanation: Optional[str] = None

class OptionContentIn(BaseModel):
    language_code: str = Field(min_length=1)
    option_text: str = Field(min_length=1)
    media_url: Optional[str] = None

class OptionIn(BaseModel):
    order_index: int = 0
    is_correct: bool = False
    content: List[OptionContentIn] = Field(min_length=1)

class QuestionCreate(BaseModel):
    quiz_id: int
    question_type: QuestionType
    order_index: int = 0
    content: List[QuestionContentIn] = Field(min_length=1)
    options: List[OptionIn] = Field(min_length=1)

class QuestionUpdate(PartialUpdate):
    question_type: Optional[QuestionType] = None
    order_index: Optional[int] = None
    is_active: Optional[bool] = None
    content: Optional[List[QuestionContentIn]] = Field(default=None, min_length=1)
    options: Optional[List[OptionIn]] = Field(default=None, min_length=1)

class OptionUpdate(PartialUpdate):
    order_index: Optional[int] = None
    is_correct: Optional[bool] = None
    is_active: Optional[bool] = None
