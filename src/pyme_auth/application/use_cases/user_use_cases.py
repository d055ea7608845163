import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from pyme_auth.adapters.repository.user_repository import UserRepository
from pyme_auth.adapters.repository.audit_repository import AuditRepository
from pyme_auth.domain.entities.audit_log_entity import AuditAction
from pyme_auth.domain.entities.user_entity import User, RoleType
from pyme_auth.domain.entities.user_classes import UserEntity
from pyme_auth.domain.exceptions import NotFoundError, StorageFault

logger = logging.getLogger(__name__)


class UserUseCases:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)
        self.repo_audit = AuditRepository(db)

    def deactivate_user(
        self,
        user_id: int,
        *,
        actor: UserEntity | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> User:
        """Idempotent: deactivating an inactive user changes nothing and writes no audit entry."""
        try:
            user, changed = self.repo.deactivate_user(user_id)
            if changed:
                self.repo_audit.append(
                    action=AuditAction.USER_DEACTIVATED,
                    user_id=user.id,
                    business_id=user.business_id,
                    actor_id=actor.id if actor else None,
                    email=user.email,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Falha ao desativar usuário %s", user_id)
            raise StorageFault("Storage failure while deactivating user") from e
        except Exception:
            self.db.rollback()
            raise

        if changed:
            logger.info("Usuário %s desativado", user_id)
        return user

    def get_user_by_id(self, user_id: int) -> User:
        user = self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def find_all_users(self):
        return self.repo.find_all_users()

    def promote_to_admin(
        self,
        user_id: int,
        *,
        actor: UserEntity | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> User:
        user = self.get_user_by_id(user_id)
        if user.role == RoleType.ADMIN:
            return user

        try:
            self.repo.update_role(user, RoleType.ADMIN)
            self.repo_audit.append(
                action=AuditAction.ROLE_CHANGED,
                user_id=user.id,
                business_id=user.business_id,
                actor_id=actor.id if actor else None,
                email=user.email,
                ip_address=ip_address,
                user_agent=user_agent,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Falha ao alterar papel do usuário %s", user_id)
            raise StorageFault("Storage failure while updating role") from e
        except Exception:
            self.db.rollback()
            raise

        logger.info("Usuário %s promovido a ADMIN", user_id)
        return user
