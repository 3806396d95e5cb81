from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from app.db.base_class import Base, utcnow

SESSION_ID_LENGTH = 8


class QuizSession(Base):
    """One play of a quiz by a named host, addressed publicly by ``unique_id``."""
    __tablename__ = "user_quiz_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    unique_id = Column(String(SESSION_ID_LENGTH), unique=True, index=True, nullable=False)
    user_name = Column(String(100), nullable=False)
    # plain code, not a foreign key: a played session outlives its language
    language_code = Column(String(5), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    quiz = relationship("Quiz")
    friends = relationship("QuizFriend", back_populates="session", cascade="all, delete-orphan", passive_deletes=True)
    answers = relationship("UserAnswer", back_populates="session", cascade="all, delete-orphan", passive_deletes=True)
