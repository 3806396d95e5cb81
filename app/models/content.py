from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text, UniqueConstraint
from app.db.base_class import Base, utcnow

class Page(Base):
    __tablename__ = "pages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(100), unique=True, index=True, nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(String(500))
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class ContentItem(Base):
    __tablename__ = "content"
    __table_args__ = (
        UniqueConstraint("page", "section", "key", "language_code", name="uq_content_page_section_key_lang"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    page = Column(String(100), nullable=False, index=True)
    section = Column(String(100), nullable=False)
    key = Column(String(100), nullable=False)
    language_code = Column(
        String(5),
        ForeignKey("languages.code", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
