from datetime import datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from pyme_auth.infrastructure.database import get_db
from pyme_auth.domain.entities.audit_log_entity import AuditAction
from pyme_auth.domain.entities.user_entity import RoleType
from pyme_auth.domain.entities.user_classes import UserEntity
from pyme_auth.domain.models.audit_models import AuditLogRead, AuditLogFilter
from pyme_auth.application.use_cases.audit_use_cases import AuditUseCases
from pyme_auth.application.use_cases.security import require_roles
from typing import List

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("", response_model=List[AuditLogRead])
def find_audit_entries(
    user_id: int | None = None,
    business_id: int | None = None,
    actor_id: int | None = None,
    action: AuditAction | None = None,
    since: datetime | None = None,
    until: datetime | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
    _: UserEntity = Depends(require_roles(RoleType.ADMIN)),
):
    filters = AuditLogFilter(
        user_id=user_id,
        business_id=business_id,
        actor_id=actor_id,
        action=action,
        since=since,
        until=until,
        limit=limit,
    )
    return AuditUseCases(db).find_entries(filters)
