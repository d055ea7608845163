import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from pyme_auth.adapters.repository.business_repository import BusinessRepository
from pyme_auth.adapters.repository.audit_repository import AuditRepository
from pyme_auth.domain.entities.audit_log_entity import AuditAction
from pyme_auth.domain.entities.user_classes import UserEntity
from pyme_auth.domain.exceptions import NotFoundError, StorageFault

logger = logging.getLogger(__name__)


class BusinessUseCases:
    def __init__(self, db: Session):
        self.db = db
        self.repo = BusinessRepository(db)
        self.repo_audit = AuditRepository(db)

    def get_business(self, business_id: int):
        business = self.repo.get_business_by_id(business_id)
        if business is None:
            raise NotFoundError(f"Business {business_id} not found")
        return business

    def find_all_business(self):
        return self.repo.find_all_business()

    def deactivate_business(
        self,
        business_id: int,
        *,
        actor: UserEntity | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ):
        try:
            business, changed = self.repo.deactivate_business(business_id)
            if changed:
                self.repo_audit.append(
                    action=AuditAction.BUSINESS_DEACTIVATED,
                    business_id=business.id,
                    actor_id=actor.id if actor else None,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Falha ao desativar empresa %s", business_id)
            raise StorageFault("Storage failure while deactivating business") from e
        except Exception:
            self.db.rollback()
            raise

        if changed:
            logger.info("Empresa %s desativada", business_id)
        return business
