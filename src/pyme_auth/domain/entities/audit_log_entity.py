from pyme_auth.infrastructure.database import Base
from datetime import datetime, timezone
from sqlalchemy import Integer, String, Text, DateTime, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import event
from enum import Enum as PyEnum

from pyme_auth.domain.exceptions import AuditLogImmutableError


class AuditAction(str, PyEnum):
    REGISTER_SUCCESS = "REGISTER_SUCCESS"
    REGISTER_FAILURE = "REGISTER_FAILURE"
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILURE = "LOGIN_FAILURE"
    USER_DEACTIVATED = "USER_DEACTIVATED"
    BUSINESS_DEACTIVATED = "BUSINESS_DEACTIVATED"
    ROLE_CHANGED = "ROLE_CHANGED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditLogEntry(Base):
    """
    Append-only ledger of authentication events.

    user_id/business_id/actor_id are weak references (no FK): deactivating or
    removing identity rows never touches the history kept here.
    """
    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    business_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    # quem executou a ação (admin); nulo quando é o próprio usuário ou um script
    actor_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    action: Mapped[AuditAction] = mapped_column(
        SAEnum(AuditAction, name="auditaction"), nullable=False, index=True
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    ip_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    def __repr__(self) -> str:
        return f"<AuditLogEntry(id={self.id}, action={self.action})>"


@event.listens_for(AuditLogEntry, "before_update")
def _reject_update(mapper, connection, target: AuditLogEntry):
    raise AuditLogImmutableError(f"audit_log entry {target.id} cannot be updated")


@event.listens_for(AuditLogEntry, "before_delete")
def _reject_delete(mapper, connection, target: AuditLogEntry):
    raise AuditLogImmutableError(f"audit_log entry {target.id} cannot be deleted")
