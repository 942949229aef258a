"""
User Repository - Data access layer for user-related operations
"""

from datetime import datetime
from typing import Optional, List, Tuple
from uuid import UUID
from sqlalchemy import or_, func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import User
from domain.enums import UserStatus, SortDirection
from app.exceptions import ServiceValidationError
from app.helpers import INTERNAL_EMAIL_DOMAINS

USER_SORT_COLUMNS = {
    "created_at": User.created_at,
    "updated_at": User.updated_at,
    "name": User.name,
    "email": User.email,
}


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def get_by_phone(self, phone_number: str) -> Optional[User]:
        return self.db.query(User).filter(User.phone_number == phone_number).first()

    def nickname_taken(self, canonical: str) -> bool:
        return (
            self.db.query(User.id)
            .filter(func.lower(User.nick_name) == canonical.lower())
            .first()
            is not None
        )

    def create_user(self, user: User) -> User:
        """Insert a user; unique violations surface as validation errors"""
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError as e:
            self.db.rollback()
            raise ServiceValidationError(
                "User with this email or phone number already exists"
            ) from e

    def search(
        self,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        status: Optional[UserStatus] = None,
        locale: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: SortDirection = SortDirection.DESC,
    ) -> Tuple[List[User], int]:
        query = self.db.query(User)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    User.name.ilike(pattern),
                    User.display_name.ilike(pattern),
                    User.nick_name.ilike(pattern),
                    User.email.ilike(pattern),
                    User.phone_number.ilike(pattern),
                )
            )
        if status is not None:
            query = query.filter(User.user_status == status)
        if locale:
            query = query.filter(User.locale == locale)
        column = USER_SORT_COLUMNS.get(sort_by, User.created_at)
        direction = column.asc() if sort_order == SortDirection.ASC else column.desc()
        query = query.order_by(direction, User.id)
        return self.paginate(query, page, page_size)

    def get_without_nickname(self) -> List[User]:
        return (
            self.db.query(User)
            .filter(or_(User.nick_name.is_(None), User.nick_name == ""))
            .order_by(User.created_at)
            .all()
        )

    def update_status_bulk(self, user_ids: List[UUID], status: UserStatus) -> int:
        count = (
            self.db.query(User)
            .filter(User.id.in_(set(user_ids)))
            .update({User.user_status: status}, synchronize_session="fetch")
        )
        self.db.commit()
        return count

    # ------------------------------------------------------------------
    # Statistics over real accounts
    # ------------------------------------------------------------------

    def _real_users(self):
        email = func.lower(User.email)
        query = self.db.query(User)
        for domain in INTERNAL_EMAIL_DOMAINS:
            query = query.filter(~email.like(f"%{domain}"))
        return query

    def count_real(
        self, status: Optional[UserStatus] = None, created_since: Optional[datetime] = None
    ) -> int:
        query = self._real_users()
        if status is not None:
            query = query.filter(User.user_status == status)
        if created_since is not None:
            query = query.filter(User.created_at >= created_since)
        return query.count()
