# mytaxy/services/payment_service.py
"""
Razorpay orders and payment verification for rides.

A verified payment is what moves a card ride's ``payment_status`` to
``completed``, which in turn makes it eligible for a receipt.
"""
import hashlib
import hmac
import logging
import time
from typing import Any, List, Optional

import razorpay
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mytaxy.core.config import settings
from mytaxy.database.models import Ride
from mytaxy.database.payment_models import Payment
from mytaxy.services.errors import ServiceError
from mytaxy.utils import rupees_to_paise

logger = logging.getLogger(__name__)

CURRENCY = "INR"

_razorpay_client: Optional[Any] = None


class PaymentError(ServiceError):
    status_code = 400


def razorpay_configured() -> bool:
    return bool(settings.RAZORPAY_KEY_ID and settings.RAZORPAY_KEY_SECRET)


def get_razorpay_client() -> Optional[Any]:
    """Lazily build the Razorpay client; None when running on the fallback gateway."""
    global _razorpay_client
    if settings.PAYMENT_GATEWAY != "razorpay" or not razorpay_configured():
        return None
    if _razorpay_client is None:
        _razorpay_client = razorpay.Client(auth=(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET))
    return _razorpay_client


def _get_ride(db: Session, ride_id: int, user_id: Optional[int] = None) -> Ride:
    ride = db.query(Ride).filter(Ride.id == ride_id).first()
    if ride is None:
        raise PaymentError("Ride not found", status_code=404)
    if user_id is not None and ride.user_id != user_id:
        raise PaymentError("Not authorized to pay for this ride", status_code=403)
    return ride


def create_order(
    db: Session,
    ride_id: int,
    amount: Optional[float] = None,
    client: Optional[Any] = None,
    user_id: Optional[int] = None,
) -> Payment:
    """
    Create a gateway order for a ride and record it as a CREATED payment.

    ``amount`` is in rupees and defaults to the ride fare. Without a Razorpay
    client a local ``dev-<millis>`` order id is issued. When ``user_id`` is
    given the ride must belong to that rider.
    """
    ride = _get_ride(db, ride_id, user_id)
    if ride.payment_status == "completed":
        raise PaymentError("Payment already completed for this ride")

    amount_rupees = amount if amount is not None else ride.fare
    if not amount_rupees or amount_rupees <= 0:
        raise PaymentError("amount must be greater than 0")
    amount_paise = rupees_to_paise(amount_rupees)

    client = client if client is not None else get_razorpay_client()
    if client is not None:
        try:
            order = client.order.create({
                "amount": amount_paise,
                "currency": CURRENCY,
                "receipt": f"receipt_{ride.id}",
                "notes": {"rideId": str(ride.id)},
            })
        except Exception as e:
            logger.exception("Razorpay order creation failed for ride %s", ride.id)
            raise PaymentError("Error creating payment", status_code=502) from e
        order_id = order["id"]
    else:
        order_id = f"dev-{int(time.time() * 1000)}"
        logger.info("Fallback gateway: issued local order %s for ride %s", order_id, ride.id)

    payment = Payment(
        order_id=order_id,
        ride_id=ride.id,
        user_id=ride.user_id,
        status="CREATED",
        amount=amount_paise,
        currency=CURRENCY,
    )
    ride.order_id = order_id
    db.add(payment)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("DB error while recording order %s: %s", order_id, e)
        raise PaymentError("Error creating payment", status_code=500) from e
    db.refresh(payment)
    return payment


def verify_signature(order_id: str, payment_id: str, signature: str, secret: Optional[str] = None) -> bool:
    """Razorpay checkout signature: HMAC-SHA256 of "<order_id>|<payment_id>"."""
    key = secret if secret is not None else settings.RAZORPAY_KEY_SECRET
    if not key:
        return False
    expected = hmac.new(key.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature or "")


def verify_payment(
    db: Session,
    order_id: str,
    payment_id: str,
    signature: str,
    ride_id: int,
    user_id: Optional[int] = None,
) -> Payment:
    if not settings.RAZORPAY_KEY_SECRET:
        logger.error("Refusing to verify order %s: RAZORPAY_KEY_SECRET is not set", order_id)
        raise PaymentError("Payment verification is not configured", status_code=503)
    if not verify_signature(order_id, payment_id, signature):
        logger.warning("Signature mismatch for order %s", order_id)
        raise PaymentError("Invalid signature")

    payment = db.query(Payment).filter(Payment.order_id == order_id).first()
    if payment is None:
        raise PaymentError("Order not found", status_code=404)
    if payment.ride_id != ride_id:
        raise PaymentError("Order does not belong to this ride")
    if user_id is not None and payment.user_id != user_id:
        raise PaymentError("Not authorized to pay for this ride", status_code=403)

    # idempotency - a repeated verification of a paid order is a no-op
    if payment.status == "PAID":
        return payment

    ride = _get_ride(db, ride_id)
    payment.status = "PAID"
    payment.payment_id = payment_id
    payment.razorpay_signature = signature
    ride.payment_status = "completed"
    ride.payment_method = "razorpay"
    ride.payment_id = payment_id
    ride.order_id = order_id
    ride.signature = signature
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("DB error while verifying payment %s: %s", payment_id, e)
        raise PaymentError("Error verifying payment", status_code=500) from e

    db.refresh(payment)
    logger.info("Payment %s verified for ride %s", payment_id, ride_id)
    return payment


def payment_history(db: Session, user_id: int) -> List[Payment]:
    """A rider's payments, newest first."""
    return (
        db.query(Payment)
        .filter(Payment.user_id == user_id)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .all()
    )
