import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.db.repositories import (
    MatchRepository,
    ProfileRepository,
    UserLanguageRepository,
    UserRepository,
)
from app.models.match import Match
from app.models.profile import Profile
from app.models.schemas import (
    MatchCreate,
    ProfileCreate,
    ProfileUpdate,
    UserCreate,
    UserLanguageCreate,
    UserUpdate,
)
from app.models.user import User
from app.models.user_language import UserLanguage

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.users = UserRepository(db)

    def list_users(self) -> List[User]:
        return self.users.list_all()

    def get_user(self, user_id: int) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _check_email_free(self, email, user_id=None) -> None:
        if email is None:
            return
        existing = self.users.get_by_email(email)
        if existing is not None and existing.id != user_id:
            raise ConflictError("Email already registered")

    def create_user(self, data: UserCreate) -> User:
        self._check_email_free(data.email)
        user = self.users.save(User(**data.model_dump()))
        logger.info(f"Created user {user.id}")
        return user

    def update_user(self, user_id: int, patch: UserUpdate) -> User:
        """Apply only the fields that were sent with a non-null value."""
        user = self.get_user(user_id)
        changes = patch.model_dump(exclude_none=True)
        self._check_email_free(changes.get("email"), user_id=user.id)

        for field, value in changes.items():
            setattr(user, field, value)
        return self.users.save(user)


class ProfileService:
    def __init__(self, db: Session):
        self.profiles = ProfileRepository(db)
        self.users = UserRepository(db)

    def list_profiles(self) -> List[Profile]:
        return self.profiles.list_all()

    def get_profile(self, profile_id: int) -> Profile:
        profile = self.profiles.get(profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    def create_profile(self, data: ProfileCreate) -> Profile:
        if not self.users.exists(data.user_id):
            raise NotFoundError("User not found")
        if self.profiles.get_by_user(data.user_id) is not None:
            raise ConflictError("Profile already exists for this user")
        return self.profiles.save(Profile(**data.model_dump()))

    def update_profile(self, profile_id: int, data: ProfileUpdate) -> Profile:
        # Unlike users, every editable field is replaced, nulls included
        profile = self.get_profile(profile_id)
        for field, value in data.model_dump().items():
            setattr(profile, field, value)
        return self.profiles.save(profile)


class LanguageService:
    def __init__(self, db: Session):
        self.languages = UserLanguageRepository(db)
        self.users = UserRepository(db)

    def list_languages(self) -> List[UserLanguage]:
        return self.languages.list_all()

    def list_for_user(self, user_id: int) -> List[UserLanguage]:
        return self.languages.list_for_user(user_id)

    def add_language(self, data: UserLanguageCreate) -> UserLanguage:
        if not self.users.exists(data.user_id):
            raise NotFoundError("User not found")
        return self.languages.save(UserLanguage(**data.model_dump()))

    def delete_language(self, language_id: int) -> None:
        language = self.languages.get(language_id)
        if language is None:
            raise NotFoundError("Language not found")
        self.languages.delete(language)


class MatchService:
    def __init__(self, db: Session):
        self.matches = MatchRepository(db)
        self.users = UserRepository(db)

    def list_matches(self) -> List[Match]:
        return self.matches.list_all()

    def get_match(self, match_id: int) -> Match:
        match = self.matches.get(match_id)
        if match is None:
            raise NotFoundError("Match not found")
        return match

    def create_match(self, data: MatchCreate) -> Match:
        if data.user1_id == data.user2_id:
            raise ValidationError("Cannot match a user with themself")
        for user_id in (data.user1_id, data.user2_id):
            if not self.users.exists(user_id):
                raise NotFoundError("User not found")

        match = self.matches.save(Match(user1_id=data.user1_id, user2_id=data.user2_id))
        logger.info(f"Created match {match.id} between users {match.user1_id} and {match.user2_id}")
        return match
