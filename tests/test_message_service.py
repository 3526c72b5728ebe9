import pytest
from datetime import datetime, timedelta, timezone

from app.core.exceptions import NotFoundError, ValidationError
from app.models.match import Match
from app.models.message import Message
from app.services.message_service import MessageService

MISSING_ID = 9999

@pytest.fixture
def service(db_session):
    return MessageService(db_session)

def test_send_persists_trimmed_unread_message(service, users, match):
    alice, _ = users
    message = service.send(match.id, alice.id, "  hello  ")

    assert message.id is not None
    assert message.content == "hello"
    assert message.is_read is False
    assert message.match_id == match.id
    assert message.sender_id == alice.id
    assert message.sent_at is not None

def test_send_assigns_server_timestamp(service, users, match):
    alice, _ = users
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    message = service.send(match.id, alice.id, "hi")
    after = datetime.now(timezone.utc).replace(tzinfo=None)

    sent_at = message.sent_at.replace(tzinfo=None)
    assert before <= sent_at <= after

def test_send_accepts_exactly_max_length(service, users, match):
    alice, _ = users
    message = service.send(match.id, alice.id, "a" * 1000)
    assert len(message.content) == 1000

def test_send_rejects_one_over_max_length(service, users, match):
    alice, _ = users
    with pytest.raises(ValidationError, match="Message is too long"):
        service.send(match.id, alice.id, "a" * 1001)

def test_length_is_measured_before_trimming(service, users, match):
    alice, _ = users
    with pytest.raises(ValidationError, match="Message is too long"):
        service.send(match.id, alice.id, " " + "a" * 999 + " ")

def test_custom_max_length(db_session, users, match):
    alice, _ = users
    service = MessageService(db_session, max_length=5)
    service.send(match.id, alice.id, "12345")
    with pytest.raises(ValidationError, match="Message is too long"):
        service.send(match.id, alice.id, "123456")

@pytest.mark.parametrize("content", ["", "   ", "\n\t ", None])
def test_send_rejects_blank_content(service, users, match, content):
    alice, _ = users
    with pytest.raises(ValidationError, match="Message content cannot be empty"):
        service.send(match.id, alice.id, content)

def test_send_validation_order(service):
    # Shape problems are reported before anything is looked up
    with pytest.raises(ValidationError, match="Match ID is required"):
        service.send(None, None, None)
    with pytest.raises(ValidationError, match="Sender ID is required"):
        service.send(MISSING_ID, None, None)
    with pytest.raises(ValidationError, match="Message content cannot be empty"):
        service.send(MISSING_ID, MISSING_ID, " ")
    with pytest.raises(ValidationError, match="Message is too long"):
        service.send(MISSING_ID, MISSING_ID, "a" * 1001)
    with pytest.raises(NotFoundError, match="Match not found"):
        service.send(MISSING_ID, MISSING_ID, "hi")

def test_send_unknown_sender(service, match):
    with pytest.raises(NotFoundError, match="Sender user not found"):
        service.send(match.id, MISSING_ID, "hi")

def test_list_by_match_empty(service, match):
    assert service.list_by_match(match.id) == []

def test_list_by_match_missing_match(service):
    with pytest.raises(NotFoundError, match="Match not found"):
        service.list_by_match(MISSING_ID)

def test_list_by_match_is_in_insertion_order(service, users, match):
    alice, bob = users
    first = service.send(match.id, alice.id, "first")
    second = service.send(match.id, bob.id, "second")
    third = service.send(match.id, alice.id, "third")

    assert [m.id for m in service.list_by_match(match.id)] == [first.id, second.id, third.id]

def test_list_by_match_orders_by_timestamp(db_session, service, users, match):
    alice, _ = users
    now = datetime.now(timezone.utc)
    late = Message(match_id=match.id, sender_id=alice.id, content="late", sent_at=now)
    early = Message(match_id=match.id, sender_id=alice.id, content="early", sent_at=now - timedelta(minutes=5))
    db_session.add_all([late, early])
    db_session.commit()

    assert [m.content for m in service.list_by_match(match.id)] == ["early", "late"]

def test_list_by_match_only_returns_that_match(db_session, service, users, match):
    alice, bob = users
    other = Match(user1_id=bob.id, user2_id=alice.id)
    db_session.add(other)
    db_session.commit()

    service.send(match.id, alice.id, "mine")
    service.send(other.id, bob.id, "theirs")

    assert [m.content for m in service.list_by_match(match.id)] == ["mine"]

def test_latest_by_match_returns_later_insertion(service, users, match):
    alice, bob = users
    service.send(match.id, alice.id, "first")
    second = service.send(match.id, bob.id, "second")

    assert service.latest_by_match(match.id).id == second.id

def test_latest_by_match_uses_max_timestamp(db_session, service, users, match):
    alice, _ = users
    now = datetime.now(timezone.utc)
    newest = Message(match_id=match.id, sender_id=alice.id, content="newest", sent_at=now)
    older = Message(match_id=match.id, sender_id=alice.id, content="older", sent_at=now - timedelta(hours=1))
    db_session.add_all([newest, older])
    db_session.commit()

    assert service.latest_by_match(match.id).content == "newest"

def test_latest_by_match_no_messages(service, match):
    with pytest.raises(NotFoundError, match="No messages found for this match"):
        service.latest_by_match(match.id)

def test_latest_by_match_missing_match(service):
    with pytest.raises(NotFoundError, match="Match not found"):
        service.latest_by_match(MISSING_ID)

def test_send_never_goes_behind_latest_message(db_session, service, users, match):
    alice, _ = users
    future = datetime.now(timezone.utc) + timedelta(minutes=10)
    db_session.add(Message(match_id=match.id, sender_id=alice.id, content="from the future", sent_at=future))
    db_session.commit()

    message = service.send(match.id, alice.id, "now")

    assert message.sent_at.replace(tzinfo=None) == future.replace(tzinfo=None)
    assert service.latest_by_match(match.id).id == message.id

def test_mark_read(service, users, match):
    alice, _ = users
    message = service.send(match.id, alice.id, "hi")

    updated = service.mark_read(message.id)
    assert updated.id == message.id
    assert updated.is_read is True

def test_mark_read_is_idempotent(service, users, match):
    alice, _ = users
    message = service.send(match.id, alice.id, "hi")
    service.mark_read(message.id)

    again = service.mark_read(message.id)
    assert again.is_read is True
    assert again.content == "hi"

def test_mark_read_missing_message(service):
    with pytest.raises(NotFoundError, match="Message not found"):
        service.mark_read(MISSING_ID)

def test_mark_all_read_for_match(service, users, match):
    alice, bob = users
    sent = [
        service.send(match.id, alice.id, "one"),
        service.send(match.id, bob.id, "two"),
        service.send(match.id, alice.id, "three"),
    ]
    service.mark_read(sent[1].id)
    ids_before = [m.id for m in service.list_by_match(match.id)]

    result = service.mark_all_read_for_match(match.id)

    assert [m.id for m in result] == ids_before
    assert all(m.is_read for m in result)
    listed = service.list_by_match(match.id)
    assert [m.id for m in listed] == ids_before
    assert all(m.is_read for m in listed)

def test_mark_all_read_for_match_without_messages(service, match):
    assert service.mark_all_read_for_match(match.id) == []

def test_mark_all_read_for_match_missing_match(service):
    with pytest.raises(NotFoundError, match="Match not found"):
        service.mark_all_read_for_match(MISSING_ID)

def test_mark_all_read_rolls_back_on_failure(db_session, service, users, match, monkeypatch):
    alice, _ = users
    service.send(match.id, alice.id, "one")
    service.send(match.id, alice.id, "two")

    def failing_commit():
        raise RuntimeError("disk full")

    monkeypatch.setattr(db_session, "commit", failing_commit)
    with pytest.raises(RuntimeError):
        service.mark_all_read_for_match(match.id)
    monkeypatch.undo()

    assert not any(m.is_read for m in service.list_by_match(match.id))

def test_unread_count(service, users, match):
    alice, bob = users
    service.send(match.id, alice.id, "from alice")
    service.send(match.id, bob.id, "from bob")
    first_bob = service.send(match.id, bob.id, "again from bob")
    service.mark_read(first_bob.id)

    assert service.unread_count_for_match(match.id) == 2
    # Alice doesn't count her own message
    assert service.unread_count_for_match(match.id, reader_id=alice.id) == 1

def test_unread_count_missing_match(service):
    with pytest.raises(NotFoundError, match="Match not found"):
        service.unread_count_for_match(MISSING_ID)

def test_unicode_space_counts_as_content(service, users, match):
    alice, _ = users
    message = service.send(match.id, alice.id, "\u3000")
    assert message.content == "\u3000"

@pytest.mark.parametrize("content", ["\x01", "\x00 \x1f"])
def test_control_characters_count_as_blank(service, users, match, content):
    alice, _ = users
    with pytest.raises(ValidationError, match="Message content cannot be empty"):
        service.send(match.id, alice.id, content)

def test_control_characters_are_trimmed(service, users, match):
    alice, _ = users
    message = service.send(match.id, alice.id, "\x00\thi there\x1f ")
    assert message.content == "hi there"
