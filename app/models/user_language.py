from sqlalchemy import Column, Integer, String, ForeignKey

from app.db.database import Base

class UserLanguage(Base):
    __tablename__ = "user_languages"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    language_name = Column(String(100), nullable=False)
    proficiency_level = Column(String(50), nullable=True)
