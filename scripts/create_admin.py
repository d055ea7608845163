# scripts/create_admin.py
"""Cria (ou promove) a conta ADMIN a partir de variáveis de ambiente.

    ADMIN_EMAIL=... ADMIN_PASSWORD=... ADMIN_BUSINESS_NAME=... python scripts/create_admin.py
"""
import logging
import os

import pyme_auth.domain.entities  # noqa: F401
from pyme_auth.infrastructure.database import SessionLocal
from pyme_auth.application.use_cases.autentication_use_cases import AuthenticationUseCases
from pyme_auth.application.use_cases.user_use_cases import UserUseCases
from pyme_auth.adapters.repository.user_repository import UserRepository
from pyme_auth.domain.entities.user_entity import RoleType

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("create_admin")


def main() -> int:
    email = os.getenv("ADMIN_EMAIL")
    password = os.getenv("ADMIN_PASSWORD")
    business_name = os.getenv("ADMIN_BUSINESS_NAME", "Administração")

    if not email or not password:
        logger.warning("ADMIN_EMAIL/ADMIN_PASSWORD not set; skipping")
        return 1

    db = SessionLocal()
    try:
        user = UserRepository(db).get_user_by_email(email)
        if user is None:
            result = AuthenticationUseCases(db).register(
                business_name=business_name,
                business_phone=os.getenv("ADMIN_BUSINESS_PHONE"),
                email=email,
                password=password,
            )
            user_id = result.user_id
            logger.info("Created user %s", email)
        else:
            user_id = user.id

        if user is None or user.role != RoleType.ADMIN:
            UserUseCases(db).promote_to_admin(user_id)
            logger.info("User %s is now ADMIN", email)
        else:
            logger.info("Admin %s already exists; skipping", email)
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
