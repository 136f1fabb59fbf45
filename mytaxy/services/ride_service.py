# mytaxy/services/ride_service.py
"""
Captain-side ride transitions that feed the receipt flow: ending a ride and
confirming a cash payment.
"""
import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mytaxy.database.models import Ride
from mytaxy.services.errors import ServiceError

logger = logging.getLogger(__name__)

# ride time estimate used when closing a ride
SECONDS_PER_KM = 50


class RideError(ServiceError):
    status_code = 400


def _get_captain_ride(db: Session, ride_id: int, captain: Any) -> Ride:
    ride = db.query(Ride).filter(Ride.id == ride_id).first()
    if ride is None:
        raise RideError("Ride not found", status_code=404)
    if ride.captain_id != captain.id:
        raise RideError("Not authorized for this ride", status_code=403)
    return ride


def _commit(db: Session, ride: Ride, action: str) -> Ride:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("DB error while trying to %s for ride %s: %s", action, ride.id, e)
        raise RideError(f"Error trying to {action}", status_code=500) from e
    db.refresh(ride)
    return ride


def end_ride(db: Session, ride_id: int, captain: Any, now: Optional[datetime] = None) -> Ride:
    """
    Close an ongoing ride. This is the only transition into ``completed``;
    the fare is frozen and the duration recomputed from the distance.
    """
    ride = _get_captain_ride(db, ride_id, captain)
    if ride.status != "ongoing":
        raise RideError("Ride not ongoing")

    distance = ride.distance or 0
    ride.status = "completed"
    ride.end_time = now or datetime.utcnow()
    ride.duration = max(0, (distance * SECONDS_PER_KM) / 60)
    ride.fare = round(ride.fare or 0, 2)

    ride = _commit(db, ride, "end ride")
    logger.info("Ride %s completed by captain %s (fare %.2f)", ride.id, captain.id, ride.fare)
    return ride


def confirm_cash_payment(db: Session, ride_id: int, captain: Any) -> Ride:
    ride = _get_captain_ride(db, ride_id, captain)
    if ride.payment_status == "completed" and ride.payment_method != "cash":
        raise RideError("Ride already paid online")

    ride.payment_status = "completed"
    ride.payment_method = "cash"
    ride = _commit(db, ride, "confirm cash payment")
    logger.info("Cash payment confirmed for ride %s", ride.id)
    return ride
