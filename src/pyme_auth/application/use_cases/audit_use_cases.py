from sqlalchemy.orm import Session

from pyme_auth.adapters.repository.audit_repository import AuditRepository
from pyme_auth.domain.models.audit_models import AuditLogFilter


class AuditUseCases:
    """Read-only access to the audit ledger."""

    def __init__(self, db: Session):
        self.repo = AuditRepository(db)

    def find_entries(self, filters: AuditLogFilter):
        return self.repo.find_entries(
            user_id=filters.user_id,
            business_id=filters.business_id,
            actor_id=filters.actor_id,
            action=filters.action,
            since=filters.since,
            until=filters.until,
            limit=filters.limit,
        )

    def history_for_user(self, user_id: int, limit: int = 100):
        return self.repo.find_entries(user_id=user_id, limit=limit)
