from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Boolean, Index

from app.db.database import Base

class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    match_id = Column(Integer, ForeignKey("matches.id"), nullable=False)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    # Assigned by MessageService.send, never taken from the request
    sent_at = Column(DateTime(timezone=True), nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        Index("ix_messages_match_sent_at", "match_id", "sent_at"),
    )
