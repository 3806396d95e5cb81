from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Text, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from app.db.base_class import Base, utcnow

QUESTION_TYPES = ("text", "media")


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    questions = relationship(
        "Question",
        back_populates="quiz",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="(Question.order_index, Question.id)",
    )


class Question(Base):
    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint(
            "question_type IN (" + ", ".join(f"'{t}'" for t in QUESTION_TYPES) + ")",
            name="ck_questions_question_type",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    question_type = Column(String(10), nullable=False)
    order_index = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    quiz = relationship("Quiz", back_populates="questions")
    contents = relationship(
        "QuestionContent",
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="QuestionContent.language_code",
    )
    options = relationship(
        "Option",
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="(Option.order_index, Option.id)",
    )


class QuestionContent(Base):
    __tablename__ = "question_content"
    __table_args__ = (
        UniqueConstraint("question_id", "language_code", name="uq_question_content_lang"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    language_code = Column(
        String(5),
        ForeignKey("languages.code", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    question_text = Column(Text, nullable=False)
    media_url = Column(String(500))
    explanation = Column(Text)

    question = relationship("Question", back_populates="contents")


class Option(Base):
    __tablename__ = "options"

    id = Column(Integer, primary_key=True, autoincrement=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    order_index = Column(Integer, default=0, nullable=False)
    # zero, one or many options of a question may be flagged correct
    is_correct = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    question = relationship("Question", back_populates="options")
    contents = relationship(
        "OptionContent",
        back_populates="option",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OptionContent.language_code",
    )


class OptionContent(Base):
    __tablename__ = "option_content"
    __table_args__ = (
        UniqueConstraint("option_id", "language_code", name="uq_option_content_lang"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    option_id = Column(Integer, ForeignKey("options.id", ondelete="CASCADE"), nullable=False, index=True)
    language_code = Column(
        String(5),
        ForeignKey("languages.code", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    option_text = Column(Text, nullable=False)
    media_url = Column(String(500))

    option = relationship("Option", back_populates="contents")
