from datetime import datetime
from pydantic import BaseModel, Field

from pyme_auth.domain.entities.audit_log_entity import AuditAction


class AuditLogRead(BaseModel):
    id: int
    user_id: int | None = None
    business_id: int | None = None
    actor_id: int | None = None
    action: AuditAction
    email: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class AuditLogFilter(BaseModel):
    user_id: int | None = None
    business_id: int | None = None
    actor_id: int | None = None
    action: AuditAction | None = None
    since: datetime | None = None
    until: datetime | None = None
    limit: int = Field(default=100, ge=1, le=1000)
