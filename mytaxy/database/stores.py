# mytaxy/database/stores.py
"""
Thin store objects over an injected SQLAlchemy session.

Each request gets its own session from ``get_db``; the stores never open or
close sessions themselves.
"""
from typing import List, Optional, Tuple

from fastapi import Depends
from sqlalchemy.orm import Session, joinedload

from mytaxy.database.database import get_db
from mytaxy.database.models import Captain, Receipt, Ride, User


class AccountStore:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_captain(self, captain_id: int) -> Optional[Captain]:
        return self.db.query(Captain).filter(Captain.id == captain_id).first()


class RideStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, ride_id: int) -> Optional[Ride]:
        return (
            self.db.query(Ride)
            .options(joinedload(Ride.user), joinedload(Ride.captain))
            .filter(Ride.id == ride_id)
            .first()
        )


class ReceiptStore:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Receipt).options(joinedload(Receipt.user), joinedload(Receipt.captain))

    def get(self, receipt_id: int) -> Optional[Receipt]:
        return self._query().filter(Receipt.id == receipt_id).first()

    def find_by_ride(self, ride_id: int) -> Optional[Receipt]:
        return self._query().filter(Receipt.ride_id == ride_id).first()

    def exists_for_ride(self, ride_id: int) -> bool:
        return self.db.query(Receipt.id).filter(Receipt.ride_id == ride_id).first() is not None

    def receipt_number_taken(self, receipt_number: str) -> bool:
        return self.db.query(Receipt.id).filter(Receipt.receipt_number == receipt_number).first() is not None

    def create(self, receipt: Receipt) -> Receipt:
        """Insert and commit. Raises IntegrityError if the ride already has a receipt."""
        self.db.add(receipt)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(receipt)
        return receipt

    def list_for_user(self, user_id: int, page: int, limit: int) -> Tuple[List[Receipt], int]:
        base = self.db.query(Receipt).filter(Receipt.user_id == user_id)
        total = base.count()
        receipts = (
            self._query()
            .filter(Receipt.user_id == user_id)
            .order_by(Receipt.created_at.desc(), Receipt.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return receipts, total


# ✅ Dependencies for FastAPI routes
def get_account_store(db: Session = Depends(get_db)) -> AccountStore:
    return AccountStore(db)


def get_ride_store(db: Session = Depends(get_db)) -> RideStore:
    return RideStore(db)


def get_receipt_store(db: Session = Depends(get_db)) -> ReceiptStore:
    return ReceiptStore(db)
