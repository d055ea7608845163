# entities.py
from dataclasses import dataclass

from pyme_auth.domain.entities.user_entity import RoleType


@dataclass(frozen=True)
class UserEntity:
    id: int
    email: str
    role: RoleType
    is_active: bool
    business_id: int


@dataclass(frozen=True)
class AuthResult:
    """Identity tuple returned by register/login. Never carries the hash."""
    user_id: int
    email: str
    role: RoleType
    business_id: int


def normalize_email(email: str) -> str:
    # unicidade de email é case-insensitive: grava e busca sempre normalizado
    return email.strip().lower()


def to_user_entity(user) -> UserEntity:
    role_value = user.role.value if hasattr(user.role, "value") else user.role
    return UserEntity(
        id=user.id,
        email=user.email,
        role=RoleType(role_value),
        is_active=user.is_active,
        business_id=user.business_id,
    )


def to_auth_result(user) -> AuthResult:
    return AuthResult(
        user_id=user.id,
        email=user.email,
        role=user.role,
        business_id=user.business_id,
    )
