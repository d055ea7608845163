from datetime import datetime
from pydantic import BaseModel


class BusinessRead(BaseModel):
    id: int
    name: str
    phone: str | None = None
    is_active: bool
    status_changed_at: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
