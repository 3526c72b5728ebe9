from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.match import Match
from app.models.message import Message
from app.models.profile import Profile
from app.models.user import User
from app.models.user_language import UserLanguage


class Repository:
    """Lookup and save helpers shared by every table."""

    model = None

    def __init__(self, db: Session):
        self.db = db

    def get(self, obj_id: int):
        return self.db.get(self.model, obj_id)

    def exists(self, obj_id: int) -> bool:
        return self.db.query(self.model.id).filter(self.model.id == obj_id).first() is not None

    def list_all(self) -> List:
        return self.db.query(self.model).order_by(self.model.id).all()

    def save(self, obj):
        """Insert or update a single row and commit."""
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj) -> None:
        self.db.delete(obj)
        self.db.commit()


class UserRepository(Repository):
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()


class MatchRepository(Repository):
    model = Match


class ProfileRepository(Repository):
    model = Profile

    def get_by_user(self, user_id: int) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.user_id == user_id).first()


class UserLanguageRepository(Repository):
    model = UserLanguage

    def list_for_user(self, user_id: int) -> List[UserLanguage]:
        return (
            self.db.query(UserLanguage)
            .filter(UserLanguage.user_id == user_id)
            .order_by(UserLanguage.id)
            .all()
        )


class MessageRepository(Repository):
    model = Message

    def list_for_match(self, match_id: int) -> List[Message]:
        # id breaks ties between equal timestamps, so this is insertion order
        return (
            self.db.query(Message)
            .filter(Message.match_id == match_id)
            .order_by(Message.sent_at.asc(), Message.id.asc())
            .all()
        )

    def latest_for_match(self, match_id: int) -> Optional[Message]:
        return (
            self.db.query(Message)
            .filter(Message.match_id == match_id)
            .order_by(Message.sent_at.desc(), Message.id.desc())
            .first()
        )

    def count_unread_for_match(self, match_id: int, exclude_sender_id: Optional[int] = None) -> int:
        query = self.db.query(Message).filter(
            Message.match_id == match_id,
            Message.is_read.is_(False),
        )
        if exclude_sender_id is not None:
            query = query.filter(Message.sender_id != exclude_sender_id)
        return query.count()

    def save_all(self, messages: List[Message]) -> List[Message]:
        """Persist a batch in one transaction. Nothing is committed if any row fails."""
        try:
            self.db.add_all(messages)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for message in messages:
            self.db.refresh(message)
        return messages
