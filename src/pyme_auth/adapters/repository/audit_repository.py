from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from pyme_auth.domain.entities.audit_log_entity import AuditLogEntry, AuditAction
from pyme_auth.domain.exceptions import StorageFault


class AuditRepository:
    """Append-only access to the audit ledger. There is no update or delete."""

    def __init__(self, db: Session):
        self.db = db

    # Command
    def append(
        self,
        *,
        action: AuditAction,
        user_id: int | None = None,
        business_id: int | None = None,
        actor_id: int | None = None,
        email: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuditLogEntry:
        entry = AuditLogEntry(
            action=action,
            user_id=user_id,
            business_id=business_id,
            actor_id=actor_id,
            email=email,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self.db.add(entry)
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            # sem auditoria, a operação inteira precisa falhar
            raise StorageFault("Could not append audit entry") from e
        return entry

    # Queries
    def _filtered(
        self,
        query,
        *,
        user_id: int | None = None,
        business_id: int | None = None,
        actor_id: int | None = None,
        action: AuditAction | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
    ):
        if user_id is not None:
            query = query.where(AuditLogEntry.user_id == user_id)
        if business_id is not None:
            query = query.where(AuditLogEntry.business_id == business_id)
        if actor_id is not None:
            query = query.where(AuditLogEntry.actor_id == actor_id)
        if action is not None:
            query = query.where(AuditLogEntry.action == action)
        if since is not None:
            query = query.where(AuditLogEntry.created_at >= since)
        if until is not None:
            query = query.where(AuditLogEntry.created_at < until)
        return query

    def find_entries(self, *, limit: int = 100, **filters) -> list[AuditLogEntry]:
        query = self._filtered(select(AuditLogEntry), **filters)
        query = query.order_by(AuditLogEntry.id).limit(limit)
        return list(self.db.execute(query).scalars().all())

    def count(self, **filters) -> int:
        query = self._filtered(select(func.count(AuditLogEntry.id)), **filters)
        return self.db.execute(query).scalar_one()
