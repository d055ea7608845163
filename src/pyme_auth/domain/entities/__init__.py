# importa todos os modelos ORM para que fiquem registrados no Base.metadata
from pyme_auth.domain.entities.business_entity import Business
from pyme_auth.domain.entities.user_entity import User, RoleType
from pyme_auth.domain.entities.audit_log_entity import AuditLogEntry, AuditAction

__all__ = ["Business", "User", "RoleType", "AuditLogEntry", "AuditAction"]
