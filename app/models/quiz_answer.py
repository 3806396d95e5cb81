from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base_class import Base, utcnow

class UserAnswer(Base):
    __tablename__ = "user_answers"
    __table_args__ = (
        UniqueConstraint("session_id", "friend_name", "question_id", name="uq_user_answers_session_friend_question"),
    )

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("user_quiz_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    friend_name = Column(String(100), nullable=False)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False)
    selected_option_id = Column(Integer, ForeignKey("options.id", ondelete="CASCADE"), nullable=False)
    # captured from the option when the answer is saved, never recomputed
    is_correct = Column(Boolean, nullable=False)
    answered_at = Column(DateTime, default=utcnow, nullable=False)

    session = relationship("QuizSession", back_populates="answers")
