#!/usr/bin/env python3
"""
Script to create two demo users, a match between them and a short
conversation, so the messaging endpoints have something to return.
"""
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from app.db.database import SessionLocal, engine, Base
from app.models.match import Match
from app.models.profile import Profile
from app.models.user import User
from app.models.user_language import UserLanguage
from app.services.message_service import MessageService

DEMO_USERS = [
    {
        "first_name": "Maya",
        "last_name": "Torres",
        "university": "State University",
        "email": "maya.demo@example.com",
        "major": "Linguistics",
        "languages": [("Spanish", "Native"), ("English", "Fluent")],
    },
    {
        "first_name": "Kenji",
        "last_name": "Sato",
        "university": "State University",
        "email": "kenji.demo@example.com",
        "major": "Computer Science",
        "languages": [("Japanese", "Native"), ("Python", "Advanced")],
    },
]

CONVERSATION = [
    (0, "Hi Kenji! I saw you're looking for Spanish practice."),
    (1, "Yes! And you wanted help with Python, right?"),
    (0, "Exactly. Want to swap an hour each week?"),
    (1, "Sounds great. Thursday evenings work for me."),
]

def get_or_create_user(db, info):
    user = db.query(User).filter(User.email == info["email"]).first()
    if user:
        print(f"Using existing user: {user.first_name} (ID: {user.id})")
        return user

    user = User(
        first_name=info["first_name"],
        last_name=info["last_name"],
        university=info["university"],
        email=info["email"],
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    db.add(Profile(user_id=user.id, major=info["major"]))
    for name, level in info["languages"]:
        db.add(UserLanguage(user_id=user.id, language_name=name, proficiency_level=level))
    db.commit()
    print(f"Created user: {user.first_name} (ID: {user.id})")
    return user

def create_demo_data():
    """Create the demo users, their match and a conversation"""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        users = [get_or_create_user(db, info) for info in DEMO_USERS]

        match = db.query(Match).filter(
            Match.user1_id == users[0].id,
            Match.user2_id == users[1].id,
        ).first()
        if not match:
            match = Match(user1_id=users[0].id, user2_id=users[1].id)
            db.add(match)
            db.commit()
            db.refresh(match)
            print(f"Created match (ID: {match.id})")

        service = MessageService(db)
        if service.list_by_match(match.id):
            print("Conversation already present, nothing to add")
            return match.id

        for sender_index, content in CONVERSATION:
            service.send(match.id, users[sender_index].id, content)
        print(f"Added {len(CONVERSATION)} messages")

        return match.id

    finally:
        db.close()

if __name__ == "__main__":
    match_id = create_demo_data()
    print(f"\nDemo data created successfully!")
    print(f"Try: curl http://localhost:8000/api/messages/match/{match_id}")
