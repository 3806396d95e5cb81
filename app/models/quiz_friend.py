from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from app.db.base_class import Base, utcnow

class QuizFriend(Base):
    """A named participant of a session.

    Names are unique per session only among active rows, so uniqueness is
    checked by the service rather than by a table constraint.
    """
    __tablename__ = "quiz_friends"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("user_quiz_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    friend_name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    session = relationship("QuizSession", back_populates="friends")
