from sqlalchemy import Column, Integer, String, Text, ForeignKey

from app.db.database import Base

class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    bio = Column(Text, nullable=True)
    major = Column(String(200), nullable=True)
    year = Column(String(50), nullable=True)
    location = Column(String(200), nullable=True)
    career_goals = Column(Text, nullable=True)
    availability = Column(String(200), nullable=True)

    # Links
    linkedin = Column(String(500), nullable=True)
    github = Column(String(500), nullable=True)
    portfolio = Column(String(500), nullable=True)

    career = Column(String(200), nullable=True)
    career_experience = Column(Text, nullable=True)
    research_publications = Column(Text, nullable=True)
    awards = Column(Text, nullable=True)
