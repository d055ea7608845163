from sqlalchemy.orm import Session
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from pyme_auth.domain.entities.user_entity import User, RoleType
from pyme_auth.domain.entities.business_entity import Business
from pyme_auth.domain.exceptions import (
    DuplicateEmailError, DanglingReferenceError, NotFoundError, StorageFault,
)
from pyme_auth.domain.entities.user_classes import normalize_email


def _dup_key_on(err: IntegrityError, needle: str) -> bool:
    """Detecta qual constraint/coluna disparou o erro de integridade."""
    msg = str(getattr(err, "orig", err)).lower()
    return needle in msg


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    # Queries
    def get_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        query = select(User).where(User.email == normalize_email(email))
        return self.db.execute(query).scalar_one_or_none()

    def find_all_users(self):
        query = select(User).order_by(User.id)
        return self.db.execute(query).scalars().all()

    def find_users_by_business(self, business_id: int):
        query = select(User).where(User.business_id == business_id).order_by(User.id)
        return self.db.execute(query).scalars().all()

    # Commands (flush apenas; commit/rollback é do use case)
    def create_user(self, *, email: str, password_hash: str, role: RoleType, business_id: int) -> User:
        email = normalize_email(email)
        if self.get_user_by_email(email):
            raise DuplicateEmailError(email)

        if self.db.get(Business, business_id) is None:
            raise DanglingReferenceError(f"Business {business_id} does not exist")

        user = User(
            email=email,
            password_hash=password_hash,
            role=role,
            business_id=business_id,
            is_active=True,
        )
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError as e:
            # corrida entre dois registros: o índice único decide quem ganha
            if _dup_key_on(e, "email"):
                raise DuplicateEmailError(email) from e
            if _dup_key_on(e, "foreign key"):
                raise DanglingReferenceError(f"Business {business_id} does not exist") from e
            raise StorageFault("Integrity error while creating user") from e
        return user

    def deactivate_user(self, user_id: int) -> tuple[User, bool]:
        """Returns the user and whether the flag actually changed."""
        user = self.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        if not user.is_active:
            return user, False

        user.is_active = False
        self.db.flush()
        return user, True

    def update_password_hash(self, user: User, password_hash: str) -> User:
        user.password_hash = password_hash
        self.db.flush()
        return user

    def update_role(self, user: User, role: RoleType) -> User:
        user.role = role
        self.db.flush()
        return user
