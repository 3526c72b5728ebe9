from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.db.database import get_db
from app.models.schemas import MessageCreate, MessageResponse, UnreadCountResponse
from app.services.message_service import MessageService

router = APIRouter(
    prefix="/api/messages",
    tags=["messages"],
    responses={404: {"description": "Not found"}},
)

@router.get("/match/{match_id}", response_model=List[MessageResponse])
def get_messages_by_match(match_id: int, db: Session = Depends(get_db)):
    """Get every message of a match, oldest first."""
    return MessageService(db).list_by_match(match_id)

@router.get("/match/{match_id}/latest", response_model=MessageResponse)
def get_latest_message(match_id: int, db: Session = Depends(get_db)):
    """Get the most recent message of a match."""
    return MessageService(db).latest_by_match(match_id)

@router.get("/match/{match_id}/unread-count", response_model=UnreadCountResponse)
def get_unread_count(match_id: int, reader_id: Optional[int] = None, db: Session = Depends(get_db)):
    """
    Count unread messages in a match.

    Pass ``reader_id`` to leave out the messages that user sent themself.
    """
    count = MessageService(db).unread_count_for_match(match_id, reader_id=reader_id)
    return UnreadCountResponse(match_id=match_id, unread_count=count)

@router.get("/{match_id}", response_model=List[MessageResponse])
def get_messages_by_match_legacy(match_id: int, db: Session = Depends(get_db)):
    """Older clients call /api/messages/{match_id}; same behaviour as /match/{match_id}."""
    return get_messages_by_match(match_id, db)

@router.post("/", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def send_message(message_data: MessageCreate, db: Session = Depends(get_db)):
    """
    Send a message within a match.

    The timestamp and read flag are set by the server; only the match id,
    sender id and content are taken from the request.
    """
    return MessageService(db).send(
        match_id=message_data.resolved_match_id(),
        sender_id=message_data.resolved_sender_id(),
        content=message_data.content,
    )

@router.put("/match/{match_id}/read", response_model=List[MessageResponse])
def mark_all_as_read(match_id: int, db: Session = Depends(get_db)):
    """Mark every message of a match as read."""
    return MessageService(db).mark_all_read_for_match(match_id)

@router.put("/{message_id}/read", response_model=MessageResponse)
def mark_as_read(message_id: int, db: Session = Depends(get_db)):
    return MessageService(db).mark_read(message_id)
