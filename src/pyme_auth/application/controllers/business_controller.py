from fastapi import APIRouter, Depends, HTTPException, Request
from pyme_auth.infrastructure.database import get_db
from sqlalchemy.orm import Session
from pyme_auth.domain.models.business_models import BusinessRead
from pyme_auth.domain.entities.user_entity import RoleType
from pyme_auth.domain.entities.user_classes import UserEntity
from pyme_auth.domain.exceptions import NotFoundError, StorageFault
from pyme_auth.application.use_cases.business_use_cases import BusinessUseCases
from pyme_auth.application.use_cases.security import require_roles
from pyme_auth.application.utils.utils import get_client_ip, get_user_agent
from typing import List

router = APIRouter(prefix="/business", tags=["business"])


@router.get("/find_all_business", response_model=List[BusinessRead])
def find_all_business(db: Session = Depends(get_db),
                      _: UserEntity = Depends(require_roles(RoleType.ADMIN))
                      ):
    uc = BusinessUseCases(db)
    return uc.find_all_business()


@router.get("/{business_id}", response_model=BusinessRead)
def find_business_by_id(
        business_id: int,
        db: Session = Depends(get_db),
        _: UserEntity = Depends(require_roles(RoleType.ADMIN))
):
    uc = BusinessUseCases(db)
    try:
        return uc.get_business(business_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Business not found")


@router.patch("/{business_id}/deactivate", response_model=BusinessRead)
def deactivate_business(
        business_id: int,
        request: Request,
        db: Session = Depends(get_db),
        current: UserEntity = Depends(require_roles(RoleType.ADMIN))
):
    uc = BusinessUseCases(db)
    try:
        return uc.deactivate_business(
            business_id,
            actor=current,
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
        )
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Business not found")
    except StorageFault:
        raise HTTPException(status_code=503, detail="Armazenamento indisponível.")
