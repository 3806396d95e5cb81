from .user import User, AuthToken
from .language import Language
from .content import Page, ContentItem
from .quiz import Quiz, Question, QuestionContent, Option, OptionContent, QUESTION_TYPES
from .quiz_session import QuizSession, SESSION_ID_LENGTH
from .quiz_friend import QuizFriend
from .quiz_answer import UserAnswer

__all__ = [
    "User",
    "AuthToken",
    "Language",
    "Page",
    "ContentItem",
    "Quiz",
    "Question",
    "QuestionContent",
    "Option",
    "OptionContent",
    "QUESTION_TYPES",
    "QuizSession",
    "SESSION_ID_LENGTH",
    "QuizFriend",
    "UserAnswer",
]
