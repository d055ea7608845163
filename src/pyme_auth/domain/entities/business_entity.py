from pyme_auth.infrastructure.database import Base
from datetime import datetime, timezone
from sqlalchemy import Integer, String, Boolean, DateTime, func, inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import event
from typing import List


class Business(Base):
    __tablename__ = 'business'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    status_changed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # sem cascade de delete: a FK em users é RESTRICT, empresa só é desativada
    users: Mapped[List["User"]] = relationship(
        "User", back_populates="business", cascade="save-update, merge", passive_deletes="all"
    )


@event.listens_for(Business, "before_update")
def update_status_changed_at(mapper, connection, target: Business):
    """Atualiza status_changed_at apenas se o is_active for alterado."""
    hist = inspect(target).attrs.is_active.history

    if hist.has_changes():
        target.status_changed_at = datetime.now(timezone.utc)
