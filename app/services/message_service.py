import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core import config
from app.core.exceptions import NotFoundError, ValidationError
from app.db.repositories import MatchRepository, MessageRepository, UserRepository
from app.models.message import Message

logger = logging.getLogger(__name__)

# Control characters and space; Unicode spaces such as U+3000 count as content
TRIM_CHARS = "".join(chr(code) for code in range(0x21))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MessageService:
    """
    Messaging within a match: sending, ordered retrieval and read state.

    All validation happens here; the routes only translate the outcome to
    HTTP. Match and sender are always re-read from the database, the
    request only ever contributes their ids.
    """

    def __init__(self, db: Session, max_length: Optional[int] = None):
        self.messages = MessageRepository(db)
        self.matches = MatchRepository(db)
        self.users = UserRepository(db)
        self.max_length = max_length if max_length is not None else config.MAX_MESSAGE_LENGTH

    def _require_match(self, match_id: int) -> None:
        if not self.matches.exists(match_id):
            logger.info(f"Match {match_id} not found")
            raise NotFoundError("Match not found")

    def list_by_match(self, match_id: int) -> List[Message]:
        """All messages of a match, oldest first. An empty match gives an empty list."""
        self._require_match(match_id)
        return self.messages.list_for_match(match_id)

    def latest_by_match(self, match_id: int) -> Message:
        self._require_match(match_id)
        latest = self.messages.latest_for_match(match_id)
        if latest is None:
            raise NotFoundError("No messages found for this match")
        return latest

    def send(self, match_id: Optional[int], sender_id: Optional[int], content: Optional[str]) -> Message:
        """
        Validate and persist a new message.

        Args:
            match_id: Match the message belongs to
            sender_id: User sending the message
            content: Raw text; stored trimmed

        Returns:
            The persisted message with its id and server-assigned timestamp

        Raises:
            ValidationError: missing ids, blank or oversized content
            NotFoundError: match or sender does not exist
        """
        if match_id is None:
            raise ValidationError("Match ID is required")
        if sender_id is None:
            raise ValidationError("Sender ID is required")
        if content is None or not content.strip(TRIM_CHARS):
            raise ValidationError("Message content cannot be empty")
        # Length is checked on the untrimmed text
        if len(content) > self.max_length:
            raise ValidationError("Message is too long")

        match = self.matches.get(match_id)
        if match is None:
            raise NotFoundError("Match not found")

        sender = self.users.get(sender_id)
        if sender is None:
            raise NotFoundError("Sender user not found")

        message = Message(
            match_id=match.id,
            sender_id=sender.id,
            content=content.strip(TRIM_CHARS),
            is_read=False,
            sent_at=self._next_sent_at(match.id),
        )
        message = self.messages.save(message)
        logger.info(f"Message {message.id} sent in match {match.id} by user {sender.id}")
        return message

    def _next_sent_at(self, match_id: int) -> datetime:
        now = datetime.now(timezone.utc)
        latest = self.messages.latest_for_match(match_id)
        # Never go behind the newest message if the clock stepped back
        if latest is not None and _as_utc(latest.sent_at) > now:
            return _as_utc(latest.sent_at)
        return now

    def mark_read(self, message_id: int) -> Message:
        message = self.messages.get(message_id)
        if message is None:
            raise NotFoundError("Message not found")
        message.is_read = True
        return self.messages.save(message)

    def mark_all_read_for_match(self, match_id: int) -> List[Message]:
        """Mark every message of a match as read in a single transaction."""
        self._require_match(match_id)
        messages = self.messages.list_for_match(match_id)
        if not messages:
            return messages

        changed = 0
        for message in messages:
            if not message.is_read:
                message.is_read = True
                changed += 1

        self.messages.save_all(messages)
        logger.info(f"Marked {changed} of {len(messages)} messages read in match {match_id}")
        return messages

    def unread_count_for_match(self, match_id: int, reader_id: Optional[int] = None) -> int:
        """Unread messages in a match, ignoring the reader's own messages when given."""
        self._require_match(match_id)
        return self.messages.count_unread_for_match(match_id, exclude_sender_id=reader_id)
