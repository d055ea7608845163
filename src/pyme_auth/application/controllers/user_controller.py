from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from pyme_auth.infrastructure.database import get_db
from pyme_auth.domain.models.user_models import UserRead
from pyme_auth.domain.entities.user_entity import RoleType
from pyme_auth.domain.entities.user_classes import UserEntity
from pyme_auth.domain.exceptions import NotFoundError, StorageFault
from pyme_auth.application.use_cases.user_use_cases import UserUseCases
from pyme_auth.application.use_cases.security import require_roles
from pyme_auth.application.utils.utils import get_client_ip, get_user_agent
from typing import List

router = APIRouter(prefix="/users", tags=["users"])


@router.patch("/{user_id}/deactivate", response_model=UserRead)
def deactivate_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current: UserEntity = Depends(require_roles(RoleType.ADMIN)),  # Apenas admin pode desativar
):
    """
    Desativa um usuário. Nunca apaga: a operação é idempotente e o
    histórico de auditoria continua intacto.
    """
    use_case = UserUseCases(db)
    try:
        return use_case.deactivate_user(
            user_id,
            actor=current,
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
        )
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except StorageFault:
        raise HTTPException(status_code=503, detail="Armazenamento indisponível.")


@router.get("/find_all_users", response_model=List[UserRead])
def find_all_users(db: Session = Depends(get_db), _: UserEntity = Depends(require_roles(RoleType.ADMIN))):
    use_case = UserUseCases(db)
    return use_case.find_all_users()


@router.patch("/{user_id}/promote", response_model=UserRead)
def promote_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current: UserEntity = Depends(require_roles(RoleType.ADMIN)),
):
    """Promove um usuário a ADMIN (idempotente, auditado como ROLE_CHANGED)."""
    use_case = UserUseCases(db)
    try:
        return use_case.promote_to_admin(
            user_id,
            actor=current,
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
        )
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except StorageFault:
        raise HTTPException(status_code=503, detail="Armazenamento indisponível.")
