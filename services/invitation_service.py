from typing import List
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import InvitationCode
from domain.schemas.consultation_schemas import InvitationCodeCreate
from domain.enums import InvitationCodeKind
from repositories import InvitationCodeRepository
from app.config import settings
from app.exceptions import NotFoundError, ServiceUnavailableError, ServiceValidationError
from app.helpers import calculate_expires_at, generate_invitation_code

logger = logging.getLogger("kdoc_admin.invitation_codes")


class InvitationCodeService:
    @staticmethod
    def list_codes(db: Session) -> List[InvitationCode]:
        return InvitationCodeRepository(db).list_all()

    @staticmethod
    def create_code(db: Session, payload: InvitationCodeCreate) -> InvitationCode:
        """
        Issue a new invitation code.

        VIP codes never expire. PAYMENT_REFERENCE codes expire after
        ``expires_in_days`` (1 to 365, default from settings). Collisions
        with existing codes are retried with a fresh random code.

        Raises:
            ServiceValidationError: unknown kind or out-of-range expiry
            ServiceUnavailableError: every generated code already existed
        """
        try:
            kind = InvitationCodeKind(payload.kind)
        except ValueError as e:
            raise ServiceValidationError(
                "Invalid invitation code kind",
                details={"allowed": [k.value for k in InvitationCodeKind]},
            ) from e
        expires_in_days = payload.expires_in_days
        if expires_in_days is None:
            expires_in_days = settings.invitation_code_default_expiry_days
        if kind == InvitationCodeKind.PAYMENT_REFERENCE and not 1 <= expires_in_days <= 365:
            raise ServiceValidationError("Expires in days must be between 1 and 365")

        repo = InvitationCodeRepository(db)
        for attempt in range(1, settings.invitation_code_max_attempts + 1):
            code = generate_invitation_code(kind.value)
            if repo.get_by_code(code) is None:
                break
            logger.warning("Invitation code collision on attempt %d", attempt)
        else:
            raise ServiceUnavailableError("Failed to generate unique code")

        invitation = repo.create(
            InvitationCode(
                code=code,
                kind=kind,
                expires_at=calculate_expires_at(kind.value, expires_in_days),
            )
        )
        logger.info("Issued %s invitation code %s", kind.value, invitation.id)
        return invitation

    @staticmethod
    def delete_code(db: Session, code_id: uuid.UUID) -> None:
        repo = InvitationCodeRepository(db)
        invitation = repo.get_by_id(code_id)
        if not invitation:
            raise NotFoundError("Invitation code not found")
        if invitation.used_by is not None:
            raise ServiceValidationError("Cannot delete used invitation code")
        repo.delete(invitation)
