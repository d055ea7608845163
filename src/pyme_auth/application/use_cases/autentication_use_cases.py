import logging
import os

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from pyme_auth.adapters.repository.audit_repository import AuditRepository
from pyme_auth.adapters.repository.business_repository import BusinessRepository
from pyme_auth.adapters.repository.user_repository import UserRepository
from pyme_auth.application.use_cases.security import (
    hash_password, verify_and_update_password,
)
from pyme_auth.domain.entities.audit_log_entity import AuditAction
from pyme_auth.domain.entities.user_entity import RoleType
from pyme_auth.domain.entities.user_classes import AuthResult, normalize_email, to_auth_result
from pyme_auth.domain.exceptions import (
    DuplicateEmailError, InvalidCredentialsError, StorageFault,
)

logger = logging.getLogger(__name__)

AUDIT_FAILED_REGISTRATIONS = os.environ.get("AUDIT_FAILED_REGISTRATIONS", "false").lower() in ("1", "true", "yes")


class AuthenticationUseCases:
    """Application business rules for auth.

    register and login each run as a single unit of work on ``db``: the
    identity mutation and its audit entry are committed together, or not at
    all.
    """

    def __init__(self, db: Session, *, audit_failed_registrations: bool | None = None):
        self.db = db
        self.repo_user = UserRepository(db)
        self.repo_business = BusinessRepository(db)
        self.repo_audit = AuditRepository(db)
        if audit_failed_registrations is None:
            audit_failed_registrations = AUDIT_FAILED_REGISTRATIONS
        self.audit_failed_registrations = audit_failed_registrations

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Falha ao confirmar unidade de trabalho")
            raise StorageFault("Could not commit unit of work") from e

    def register(
        self,
        *,
        business_name: str,
        business_phone: str | None,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthResult:
        email = normalize_email(email)
        try:
            if self.repo_user.get_user_by_email(email) is not None:
                raise DuplicateEmailError(email)

            password_hash = hash_password(password)
            business = self.repo_business.create_business(name=business_name, phone=business_phone)
            user = self.repo_user.create_user(
                email=email,
                password_hash=password_hash,
                role=RoleType.PYME,
                business_id=business.id,
            )
            self.repo_audit.append(
                action=AuditAction.REGISTER_SUCCESS,
                user_id=user.id,
                business_id=business.id,
                email=email,
                ip_address=ip_address,
                user_agent=user_agent,
            )
            result = to_auth_result(user)
        except DuplicateEmailError:
            self.db.rollback()
            if self.audit_failed_registrations:
                self._audit_failed_registration(email, ip_address, user_agent)
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Falha de armazenamento ao registrar usuário")
            raise StorageFault("Storage failure during registration") from e
        except Exception:
            self.db.rollback()
            raise

        self._commit()
        logger.info("Usuário registrado: user_id=%s business_id=%s", result.user_id, result.business_id)
        return result

    def _audit_failed_registration(self, email: str, ip_address: str | None, user_agent: str | None):
        # unidade de trabalho própria, depois do rollback do registro
        try:
            self.repo_audit.append(
                action=AuditAction.REGISTER_FAILURE,
                email=email,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        except StorageFault:
            self.db.rollback()
            raise
        self._commit()

    def login(
        self,
        *,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthResult:
        email = normalize_email(email)
        try:
            user = self.repo_user.get_user_by_email(email)
            # verifica sempre, mesmo sem usuário, para o tempo de resposta não revelar nada
            ok, new_hash = verify_and_update_password(password, user.password_hash if user else None)
            if ok and (not user.is_active or not user.business.is_active):
                ok = False

            if not ok:
                self.repo_audit.append(
                    action=AuditAction.LOGIN_FAILURE,
                    user_id=user.id if user else None,
                    business_id=user.business_id if user else None,
                    email=email,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
            else:
                if new_hash:
                    self.repo_user.update_password_hash(user, new_hash)
                self.repo_audit.append(
                    action=AuditAction.LOGIN_SUCCESS,
                    user_id=user.id,
                    business_id=user.business_id,
                    email=email,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
            result = to_auth_result(user) if ok else None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Falha de armazenamento no login")
            raise StorageFault("Storage failure during login") from e
        except Exception:
            self.db.rollback()
            raise

        self._commit()
        if not ok:
            logger.warning("Login falhou para %s (ip=%s)", email, ip_address)
            raise InvalidCredentialsError()

        logger.info("Login ok: user_id=%s", result.user_id)
        return result
