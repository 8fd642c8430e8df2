"""User repository - Database operations for accounts"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import User


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        """Case-insensitive username lookup"""
        return db.query(User).filter(func.lower(User.username) == username.lower()).first()

    @staticmethod
    def create_user(db: Session, commit: bool = True, **user_data) -> User:
        """Create a new user; pass commit=False to bundle with a follow-up insert"""
        user = User(**user_data)
        db.add(user)
        if commit:
            db.commit()
            db.refresh(user)
        else:
            db.flush()
        return user

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        """Update a user with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(user, key):
                setattr(user, key, value)

        db.commit()
        db.refresh(user)
        return user
