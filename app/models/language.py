from sqlalchemy import Column, Integer, String, Boolean, DateTime
from app.db.base_class import Base, utcnow

class Language(Base):
    __tablename__ = "languages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(5), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    native_name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    # at most one row carries the flag; see services.languages
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
