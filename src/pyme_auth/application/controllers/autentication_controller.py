from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from pyme_auth.infrastructure.database import get_db
from pyme_auth.domain.models.user_models import (
    RegisterRequest, RegisterResponse, LoginRequest, LoginResponse, UserRead,
)
from pyme_auth.domain.entities.user_classes import UserEntity
from pyme_auth.domain.exceptions import (
    DuplicateEmailError, DanglingReferenceError, InvalidCredentialsError, StorageFault,
)
from pyme_auth.application.use_cases.autentication_use_cases import AuthenticationUseCases
from pyme_auth.application.use_cases.user_use_cases import UserUseCases
from pyme_auth.application.use_cases.security import get_current_user, create_access_token
from pyme_auth.application.utils.utils import get_client_ip, get_user_agent
import logging

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger(__name__)


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(payload: RegisterRequest, request: Request, db: Session = Depends(get_db)):
    uc = AuthenticationUseCases(db)
    try:
        result = uc.register(
            business_name=payload.business_name,
            business_phone=payload.business_phone,
            email=payload.email,
            password=payload.password,
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
        )
        return RegisterResponse(
            user_id=result.user_id,
            email=result.email,
            role=result.role,
            business_id=result.business_id,
        )
    except DuplicateEmailError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"field": "email", "msg": "E-mail já cadastrado."},
        )
    except DanglingReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageFault:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Armazenamento indisponível.")
    except Exception:
        logger.exception("Falha inesperada ao registrar usuário")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro interno do servidor.")


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, request: Request, db: Session = Depends(get_db)):
    uc = AuthenticationUseCases(db)
    try:
        result = uc.login(
            email=payload.email,
            password=payload.password,
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
        )
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    except StorageFault:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Armazenamento indisponível.")

    token = create_access_token(email=result.email, role=result.role)
    return LoginResponse(
        access_token=token,
        token_type="bearer",
        user_id=result.user_id,
        email=result.email,
        role=result.role,
        business_id=result.business_id,
    )


@router.get("/me", response_model=UserRead)
def me(db: Session = Depends(get_db), current: UserEntity = Depends(get_current_user)):
    return UserUseCases(db).get_user_by_id(current.id)
