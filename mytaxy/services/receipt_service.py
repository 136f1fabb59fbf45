# mytaxy/services/receipt_service.py
"""
Receipt generation and lookup.

A receipt is a point-in-time copy of a completed ride and its payment. It is
written once, when the ride first passes the payment gate, and never updated.
"""
import logging
import math
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from mytaxy.core.config import settings
from mytaxy.database.models import Receipt
from mytaxy.database.schemas import (
    CaptainSummary,
    CaptainVehicle,
    CompanyDetails,
    LocationSnapshot,
    PaymentSnapshot,
    ReceiptListResponse,
    ReceiptResponse,
    ReceiptSnapshot,
    RideDetails,
    UserSummary,
)
from mytaxy.database.stores import ReceiptStore, RideStore
from mytaxy.services.errors import ServiceError
from mytaxy.services.payment_gate import check_receipt_eligibility
from mytaxy.services.pdf_generator import get_receipt_url
from mytaxy.utils import generate_receipt_number

logger = logging.getLogger(__name__)

# ride payment method -> receipt payment method
PAYMENT_METHOD_MAP = {
    "razorpay": "card",
    "cash": "cash",
    "wallet": "wallet",
    "upi": "upi",
}
DEFAULT_PAYMENT_METHOD = "cash"

RECEIPT_NUMBER_ATTEMPTS = 5

MISSING_TRANSACTION_ID = "transaction id missing"


# =====================================
# ✅ Errors
# =====================================
class ReceiptError(ServiceError):
    status_code = 500


class ReceiptNotEligible(ReceiptError):
    status_code = 400


class ReceiptForbidden(ReceiptError):
    status_code = 403


class RideNotFound(ReceiptError):
    status_code = 404


class AccountNotFound(ReceiptError):
    status_code = 404


class ReceiptNotFound(ReceiptError):
    status_code = 404


class ReceiptStoreError(ReceiptError):
    status_code = 500


# =====================================
# ✅ Snapshot construction
# =====================================
def map_payment_method(method: Optional[str]) -> str:
    mapped = PAYMENT_METHOD_MAP.get(method or "")
    if mapped is None:
        logger.warning("Unrecognized payment method %r; recording receipt as %s", method, DEFAULT_PAYMENT_METHOD)
        return DEFAULT_PAYMENT_METHOD
    return mapped


def build_receipt_snapshot(ride: Any, now: Optional[datetime] = None) -> ReceiptSnapshot:
    """Build the receipt value for a ride that already passed the payment gate."""
    method = map_payment_method(ride.payment_method)
    transaction_id = None if method == "cash" else ride.payment_id
    if method != "cash" and not transaction_id:
        logger.info("Receipt refused for ride %s: %s payment has no transaction id", ride.id, method)
        raise ReceiptNotEligible(MISSING_TRANSACTION_ID)

    payment = PaymentSnapshot(
        amount=ride.fare or 0,
        method=method,
        status=ride.payment_status or "completed",
        transaction_id=transaction_id,
        payment_date=ride.end_time or now or datetime.utcnow(),
    )
    ride_details = RideDetails(
        pickup=LocationSnapshot(address=ride.pickup_address, coordinates=ride.pickup),
        destination=LocationSnapshot(address=ride.destination_address, coordinates=ride.destination),
        distance=ride.distance or 0,
        duration=ride.duration or 0,
        vehicle_type=ride.vehicle_type,
        start_time=ride.start_time,
        end_time=ride.end_time,
    )
    return ReceiptSnapshot(
        ride_id=ride.id,
        user_id=ride.user_id,
        captain_id=ride.captain_id,
        payment=payment,
        ride_details=ride_details,
    )


def _snapshot_to_model(snapshot: ReceiptSnapshot, receipt_number: str) -> Receipt:
    payment = snapshot.payment
    details = snapshot.ride_details
    return Receipt(
        receipt_number=receipt_number,
        ride_id=snapshot.ride_id,
        user_id=snapshot.user_id,
        captain_id=snapshot.captain_id,
        payment_amount=payment.amount,
        payment_method=payment.method,
        payment_status=payment.status,
        payment_transaction_id=payment.transaction_id,
        payment_date=payment.payment_date,
        pickup_address=details.pickup.address,
        pickup_coordinates=details.pickup.coordinates,
        destination_address=details.destination.address,
        destination_coordinates=details.destination.coordinates,
        distance=details.distance,
        duration=details.duration,
        vehicle_type=details.vehicle_type,
        start_time=details.start_time,
        end_time=details.end_time,
        company_name=settings.COMPANY_NAME,
        company_address=settings.COMPANY_ADDRESS,
        company_phone=settings.COMPANY_PHONE,
        company_email=settings.COMPANY_EMAIL,
        company_gstin=settings.COMPANY_GSTIN,
    )


def _unused_receipt_number(receipts: ReceiptStore) -> str:
    for _ in range(RECEIPT_NUMBER_ATTEMPTS):
        number = generate_receipt_number()
        if not receipts.receipt_number_taken(number):
            return number
    raise ReceiptStoreError("Could not allocate a receipt number")


# =====================================
# ✅ Operations
# =====================================
def generate_receipt(ride_id: int, rides: RideStore, receipts: ReceiptStore, requester: Any = None) -> Receipt:
    """
    Issue the receipt for a ride. When ``requester`` is given it must be the
    ride's user or captain.
    """
    ride = rides.get(ride_id)
    if ride is None:
        raise RideNotFound("Ride not found")
    if requester is not None and not _is_party(requester, ride.user_id, ride.captain_id):
        raise ReceiptForbidden("Not authorized to generate a receipt for this ride")

    decision = check_receipt_eligibility(ride, receipts.exists_for_ride(ride.id))
    if not decision:
        logger.info("Receipt refused for ride %s: %s", ride.id, decision.reason)
        raise ReceiptNotEligible(decision.reason)

    if ride.user is None:
        raise AccountNotFound("User not found")
    if ride.captain is None:
        raise AccountNotFound("Captain not found")

    snapshot = build_receipt_snapshot(ride)
    try:
        receipt = receipts.create(_snapshot_to_model(snapshot, _unused_receipt_number(receipts)))
    except SQLAlchemyError as e:
        logger.exception("Error generating receipt for ride %s: %s", ride.id, e)
        raise ReceiptStoreError("Error generating receipt") from e

    logger.info("Receipt %s created for ride %s", receipt.receipt_number, ride.id)
    return receipt


def _is_party(requester: Any, user_id: Optional[int], captain_id: Optional[int]) -> bool:
    role = getattr(requester, "role", None)
    if role == "user":
        return user_id == requester.id
    if role == "captain":
        return captain_id == requester.id
    return False


def _can_view(receipt: Receipt, requester: Any) -> bool:
    return _is_party(requester, receipt.user_id, receipt.captain_id)


def get_receipt(receipt_id: int, requester: Any, receipts: ReceiptStore) -> Receipt:
    receipt = receipts.get(receipt_id)
    if receipt is None:
        raise ReceiptNotFound("Receipt not found")
    if not _can_view(receipt, requester):
        raise ReceiptForbidden("Not authorized to view this receipt")
    return receipt


def get_receipt_for_ride(ride_id: int, requester: Any, receipts: ReceiptStore) -> Receipt:
    """Look up the receipt already issued for a ride."""
    receipt = receipts.find_by_ride(ride_id)
    if receipt is None:
        raise ReceiptNotFound("Receipt not found")
    if not _can_view(receipt, requester):
        raise ReceiptForbidden("Not authorized to view this receipt")
    return receipt


def list_user_receipts(user_id: int, receipts: ReceiptStore, page: int = 1, limit: int = 10) -> ReceiptListResponse:
    page = max(1, page)
    limit = max(1, limit)
    items, total = receipts.list_for_user(user_id, page, limit)
    return ReceiptListResponse(
        receipts=[receipt_to_response(r) for r in items],
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_receipts=total,
    )


# =====================================
# ✅ Response mapping
# =====================================
def receipt_to_response(receipt: Receipt) -> ReceiptResponse:
    user = receipt.user
    captain = receipt.captain
    return ReceiptResponse(
        id=receipt.id,
        receipt_number=receipt.receipt_number,
        ride=receipt.ride_id,
        user=UserSummary(id=user.id, fullname=user.fullname, email=user.email, phone=user.phone),
        captain=CaptainSummary(
            id=captain.id,
            fullname=captain.fullname,
            phone=captain.phone,
            vehicle=CaptainVehicle(
                color=captain.vehicle_color,
                plate=captain.vehicle_plate,
                vehicle_type=captain.vehicle_type,
            ),
        ),
        payment=PaymentSnapshot(
            amount=receipt.payment_amount,
            method=receipt.payment_method,
            status=receipt.payment_status,
            transaction_id=receipt.payment_transaction_id,
            payment_date=receipt.payment_date,
        ),
        ride_details=RideDetails(
            pickup=LocationSnapshot(address=receipt.pickup_address, coordinates=receipt.pickup_coordinates),
            destination=LocationSnapshot(
                address=receipt.destination_address, coordinates=receipt.destination_coordinates
            ),
            distance=receipt.distance,
            duration=receipt.duration,
            vehicle_type=receipt.vehicle_type,
            start_time=receipt.start_time,
            end_time=receipt.end_time,
        ),
        company_details=CompanyDetails(
            name=receipt.company_name,
            address=receipt.company_address,
            phone=receipt.company_phone,
            email=receipt.company_email,
            gstin=receipt.company_gstin,
        ),
        pdf_url=get_receipt_url(receipt.id, settings.PUBLIC_BASE_URL),
        created_at=receipt.created_at,
        updated_at=receipt.updated_at,
    )
