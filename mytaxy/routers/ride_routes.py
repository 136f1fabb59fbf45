# mytaxy/routers/ride_routes.py
"""
Captain ride actions: end an ongoing ride and confirm a cash payment.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from mytaxy.auth import get_current_captain
from mytaxy.database.database import get_db
from mytaxy.database.models import Ride
from mytaxy.database.schemas import CashPaymentResponse, EndRideRequest, RideStatusResponse
from mytaxy.services import ride_service
from mytaxy.services.errors import ServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rides", tags=["Rides"])


def _ride_status(ride: Ride) -> RideStatusResponse:
    return RideStatusResponse(
        id=ride.id,
        status=ride.status,
        fare=ride.fare,
        distance=ride.distance,
        duration=ride.duration,
        end_time=ride.end_time,
        payment_method=ride.payment_method,
        payment_status=ride.payment_status,
    )


@router.post("/end-ride", response_model=RideStatusResponse)
def end_ride(
    body: EndRideRequest,
    captain: Any = Depends(get_current_captain),
    db: Session = Depends(get_db),
):
    try:
        ride = ride_service.end_ride(db, body.ride_id, captain)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return _ride_status(ride)


@router.post("/{ride_id}/cash-payment", response_model=CashPaymentResponse)
def confirm_cash_payment(
    ride_id: int,
    captain: Any = Depends(get_current_captain),
    db: Session = Depends(get_db),
):
    try:
        ride_service.confirm_cash_payment(db, ride_id, captain)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return CashPaymentResponse(success=True, message="Cash payment confirmed")
