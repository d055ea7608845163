# security.py
import os
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi import HTTPException, status, Depends
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from pyme_auth.infrastructure.database import get_db
from pyme_auth.domain.models.user_models import TokenPayload
from pyme_auth.domain.entities.user_entity import User as UserORM, RoleType
from pyme_auth.domain.entities.user_classes import UserEntity, to_user_entity

BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))

# bcrypt_sha256: lento e com salt; verify() compara em tempo constante
pwd_context = CryptContext(
    schemes=["bcrypt_sha256"],
    deprecated="auto",
    bcrypt_sha256__rounds=BCRYPT_ROUNDS,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

JWT_SECRET = os.environ.get("JWT_SECRET", "change_this_in_prod")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
JWT_LEEWAY_SECONDS = int(os.environ.get("JWT_LEEWAY_SECONDS", "30"))

def hash_password(raw: str) -> str:
    if not isinstance(raw, str):
        raise TypeError("Password must be a string")
    return pwd_context.hash(raw)

def verify_password(raw: str, hashed: str | None) -> bool:
    if not isinstance(raw, str) or hashed is None:
        # gasta o mesmo tempo de um verify real para não revelar se o email existe
        pwd_context.dummy_verify()
        return False
    return pwd_context.verify(raw, hashed)

def verify_and_update_password(raw: str, hashed: str | None) -> tuple[bool, str | None]:
    """Like verify_password, but also returns a new hash when the stored one is outdated."""
    if not isinstance(raw, str) or hashed is None:
        pwd_context.dummy_verify()
        return False, None
    return pwd_context.verify_and_update(raw, hashed)

def create_access_token(*, email: str, role: RoleType, expires_minutes: int | None = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": email, "role": role.value, "exp": expire}
    return jwt.encode(payload, JWT_SECRET, algorithm=ALGORITHM)

def decode_token(token: str) -> TokenPayload:
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[ALGORITHM],
            options={"verify_exp": True, "leeway": JWT_LEEWAY_SECONDS},
        )
        return TokenPayload(sub=payload.get("sub"), role=payload.get("role"))
    except (JWTError, ValidationError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> UserEntity:
    payload = decode_token(token)
    user: UserORM | None = db.query(UserORM).filter(UserORM.email == payload.sub).first()
    # mesma regra do login: usuário e empresa precisam estar ativos
    if not user or not user.is_active or not user.business.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return to_user_entity(user)

def require_roles(*allowed: RoleType):
    def _checker(current: UserEntity = Depends(get_current_user)) -> UserEntity:
        if current.role not in allowed:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return current
    return _checker
