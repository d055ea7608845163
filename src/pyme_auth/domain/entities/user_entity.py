# models.py
from sqlalchemy import String, Enum as SAEnum, Boolean, DateTime, ForeignKey, Integer, func, inspect
from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column, relationship
from enum import Enum as PyEnum
from sqlalchemy import event
from pyme_auth.infrastructure.database import Base

class RoleType(str, PyEnum):
    ADMIN = "ADMIN"
    PYME = "PYME"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    # sempre normalizado (strip + lower); o índice único garante unicidade case-insensitive
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[RoleType] = mapped_column(
        SAEnum(RoleType, name="roletype"), nullable=False, default=RoleType.PYME
    )
    business_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("business.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    status_changed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    business: Mapped["Business"] = relationship("Business", back_populates="users")


@event.listens_for(User, "before_update")
def update_status_changed_at(mapper, connection, target: User):
    """Atualiza status_changed_at apenas se o is_active for alterado."""
    state = inspect(target)
    hist = state.attrs.is_active.history

    if hist.has_changes():  # só se o valor realmente mudou
        target.status_changed_at = datetime.now(timezone.utc)
