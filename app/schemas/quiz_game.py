from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

class CreateSessionRequest(BaseModel):
    quiz_id: Optional[int] = None
    user_name: Optional[str] = None
    language_code: Optional[str] = None

class AddFriendRequest(BaseModel):
    unique_id: Optional[str] = None
    friend_name: Optional[str] = None

class SaveAnswerRequest(BaseModel):
    unique_id: Optional[str] = None
    friend_name: Optional[str] = None
    question_id: Optional[int] = None
    selected_option_id: Optional[int] = None

class SessionCreated(BaseModel):
    session_id: int
    unique_id: str
    quiz_title: str
    user_name: str
    language_code: str

class SessionDetail(BaseModel):
    id: int
    quiz_id: int
    unique_id: str
    user_name: str
    language_code: str
    is_active: bool
    created_at: datetime
    quiz_title: str
    quiz_description: Optional[str] = None

class SessionOption(BaseModel):
    id: int
    is_correct: bool
    order_index: int
    option_text: Optional[str] = None
    media_url: Optional[str] = None

class SessionQuestion(BaseModel):
    id: int
    question_type: str
    order_index: int
    question_text: Optional[str] = None
    media_url: Optional[str] = None
    explanation: Optional[str] = None
    options: List[SessionOption]

class SessionWithQuestions(BaseModel):
    session: SessionDetail
    questions: List[SessionQuestion]

class SessionSummary(BaseModel):
    unique_id: str
    user_name: str

class ScoredSessionSummary(SessionSummary):
    quiz_id: int

class FriendScore(BaseModel):
    friend_name: str
    total_answers: int
    correct_answers: int
    score_percentage: float

class FriendsScores(BaseModel):
    session: ScoredSessionSummary
    friends: List[FriendScore]

class FriendEntry(BaseModel):
    friend_name: str
    created_at: datetime

class FriendsList(BaseModel):
    session: SessionSummary
    friends: List[FriendEntry]

class AnswerResult(BaseModel):
    is_correct: bool

class CorrectOption(BaseModel):
    id: int
    option_text: Optional[str] = None
    media_url: Optional[str] = None

class FriendAnswer(BaseModel):
    question_id: int
    question_type: str
    order_index: int
    question_text: Optional[str] = None
    question_media: Optional[str] = None
    explanation: Optional[str] = None
    selected_option_id: int
    selected_option_text: Optional[str] = None
    selected_option_media: Optional[str] = None
    is_correct: bool
    answered_at: datetime
    correct_options: List[CorrectOption]

class FriendAnswers(BaseModel):
    session: SessionSummary
    friend_name: str
    answers: List[FriendAnswer]

class SessionListItem(SessionDetail):
    pass
