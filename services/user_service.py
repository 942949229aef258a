"""
User service - admin management of platform accounts.
"""

from typing import List, Optional, Tuple
from datetime import timedelta
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import User
from domain.schemas.user_schemas import (
    BulkStatusResult,
    NicknameBackfillResult,
    UserCreate,
    UserStats,
    UserUpdate,
)
from domain.enums import SortDirection, UserStatus
from repositories import UserRepository
from app.exceptions import AppError, NotFoundError, ServiceValidationError
from app.helpers import generate_nickname, utcnow

logger = logging.getLogger("kdoc_admin.users")


class UserService:
    @staticmethod
    def list_users(
        db: Session,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        status: Optional[UserStatus] = None,
        locale: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: SortDirection = SortDirection.DESC,
    ) -> Tuple[List[User], int]:
        return UserRepository(db).search(
            page,
            page_size,
            search=search,
            status=status,
            locale=locale,
            sort_by=sort_by,
            sort_order=sort_order,
        )

    @staticmethod
    def get_user(db: Session, user_id: uuid.UUID) -> User:
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def create_user(db: Session, payload: UserCreate) -> User:
        """
        Create a user; a nickname is generated when none is supplied.

        Raises:
            ServiceValidationError: email, phone number or nickname already in use
        """
        repo = UserRepository(db)
        if repo.get_by_email(payload.email):
            raise ServiceValidationError("User with this email already exists")
        if payload.phone_number and repo.get_by_phone(payload.phone_number):
            raise ServiceValidationError("User with this phone number already exists")

        data = payload.model_dump()
        if data.get("nick_name"):
            if repo.nickname_taken(data["nick_name"]):
                raise ServiceValidationError("Nickname already taken")
        else:
            data["nick_name"] = generate_nickname(is_taken=repo.nickname_taken).display

        user = repo.create_user(User(**data))
        logger.info("Created user %s", user.id)
        return user

    @staticmethod
    def update_user(db: Session, user_id: uuid.UUID, payload: UserUpdate) -> User:
        user = UserService.get_user(db, user_id)
        repo = UserRepository(db)
        data = payload.model_dump(exclude_unset=True)

        phone = data.get("phone_number")
        if phone and phone != user.phone_number:
            existing = repo.get_by_phone(phone)
            if existing and existing.id != user.id:
                raise ServiceValidationError("User with this phone number already exists")
        nick_name = data.get("nick_name")
        if nick_name and (user.nick_name or "").lower() != nick_name.lower():
            if repo.nickname_taken(nick_name):
                raise ServiceValidationError("Nickname already taken")
        for key in ("role", "user_status"):
            if key in data and data[key] is None:
                data.pop(key)

        for field, value in data.items():
            setattr(user, field, value)
        return repo.update(user)

    @staticmethod
    def get_stats(db: Session) -> UserStats:
        """Counts over real accounts; weeks start on Sunday."""
        repo = UserRepository(db)
        now = utcnow()
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        month_start = today.replace(day=1)
        week_start = today - timedelta(days=(today.weekday() + 1) % 7)
        return UserStats(
            total=repo.count_real(),
            active=repo.count_real(status=UserStatus.ACTIVE),
            inactive=repo.count_real(status=UserStatus.INACTIVE),
            suspended=repo.count_real(status=UserStatus.SUSPENDED),
            deleted=repo.count_real(status=UserStatus.DELETED),
            new_this_month=repo.count_real(created_since=month_start),
            new_this_week=repo.count_real(created_since=week_start),
        )

    @staticmethod
    def bulk_update_status(
        db: Session, user_ids: List[uuid.UUID], status: UserStatus
    ) -> BulkStatusResult:
        if not user_ids:
            raise ServiceValidationError("user_ids must not be empty")
        try:
            updated = UserRepository(db).update_status_bulk(user_ids, status)
        except Exception:
            db.rollback()
            logger.exception("Error updating status of %d users", len(user_ids))
            raise
        logger.info("Set status %s on %d users", status.value, updated)
        return BulkStatusResult(updated=updated, status=status)

    @staticmethod
    def backfill_nicknames(db: Session) -> NicknameBackfillResult:
        """
        Give every user without a nickname a generated one.

        The user id seeds the generator so a rerun proposes the same names.
        One failing user does not stop the batch; its error is reported.
        """
        repo = UserRepository(db)
        success, failed, errors = 0, 0, []
        for user in repo.get_without_nickname():
            user_id = user.id
            try:
                nickname = generate_nickname(seed=user.id, is_taken=repo.nickname_taken)
                user.nick_name = nickname.display
                db.commit()
                success += 1
            except AppError as e:
                db.rollback()
                failed += 1
                errors.append(f"{user_id}: {e.message}")
                logger.warning("Nickname backfill failed for user %s: %s", user_id, e.message)
            except SQLAlchemyError:
                db.rollback()
                failed += 1
                errors.append(f"{user_id}: Failed to save nickname")
                logger.exception("Nickname backfill failed for user %s", user_id)
        logger.info("Nickname backfill finished: %d updated, %d failed", success, failed)
        return NicknameBackfillResult(success=success, failed=failed, errors=errors)
