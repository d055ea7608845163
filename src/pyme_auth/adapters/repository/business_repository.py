from sqlalchemy.orm import Session
from sqlalchemy import select

from pyme_auth.domain.entities.business_entity import Business
from pyme_auth.domain.exceptions import NotFoundError

class BusinessRepository:
    def __init__(self, db: Session):
        self.db = db

    # Queries
    def get_business_by_id(self, business_id: int) -> Business | None:
        return self.db.get(Business, business_id)

    def find_all_business(self):
        query = select(Business).order_by(Business.id)
        return self.db.execute(query).scalars().all()

    # Commands (flush apenas; commit/rollback é do use case)
    def create_business(self, *, name: str, phone: str | None) -> Business:
        business = Business(name=name, phone=phone, is_active=True)
        self.db.add(business)
        self.db.flush()
        return business

    def deactivate_business(self, business_id: int) -> tuple[Business, bool]:
        """Returns the business and whether the flag actually changed."""
        business = self.get_business_by_id(business_id)
        if business is None:
            raise NotFoundError(f"Business {business_id} not found")
        if not business.is_active:
            return business, False

        business.is_active = False
        self.db.flush()
        return business, True
