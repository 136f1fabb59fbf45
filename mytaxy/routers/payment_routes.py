# mytaxy/routers/payment_routes.py
"""
Payment routes (Razorpay + dev-friendly fallback)
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from mytaxy.auth import get_current_user
from mytaxy.core.config import settings
from mytaxy.database.database import get_db
from mytaxy.database.schemas import (
    CreateOrderRequest,
    CreateOrderResponse,
    PaymentRecord,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from mytaxy.services import payment_service
from mytaxy.services.errors import ServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.get("/gateway-status")
def get_gateway_status() -> Dict[str, Any]:
    return {
        "gateway": settings.PAYMENT_GATEWAY,
        "razorpay_available": payment_service.get_razorpay_client() is not None,
        "key_id": settings.RAZORPAY_KEY_ID or None,
    }


@router.post("/create-order", response_model=CreateOrderResponse)
def create_order(
    body: CreateOrderRequest,
    user: Any = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CreateOrderResponse:
    try:
        payment = payment_service.create_order(db, body.ride_id, amount=body.amount, user_id=user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return CreateOrderResponse(
        key_id=settings.RAZORPAY_KEY_ID or None,
        order_id=payment.order_id,
        amount=payment.amount,
        currency=payment.currency,
        ride_id=payment.ride_id,
    )


@router.post("/verify", response_model=VerifyPaymentResponse)
def verify_payment(
    body: VerifyPaymentRequest,
    user: Any = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> VerifyPaymentResponse:
    try:
        payment = payment_service.verify_payment(
            db,
            order_id=body.razorpay_order_id,
            payment_id=body.razorpay_payment_id,
            signature=body.razorpay_signature,
            ride_id=body.ride_id,
            user_id=user.id,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return VerifyPaymentResponse(
        success=True,
        message="Payment verified successfully",
        payment_id=payment.payment_id,
        ride_id=payment.ride_id,
    )


@router.get("/payment-history", response_model=List[PaymentRecord])
def get_payment_history(
    user: Any = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> List[PaymentRecord]:
    try:
        payments = payment_service.payment_history(db, user.id)
    except Exception:
        logger.exception("Error fetching payment history for user %s", user.id)
        raise HTTPException(status_code=500, detail="Error fetching payment history")

    return [
        PaymentRecord(
            id=p.id,
            order_id=p.order_id,
            payment_id=p.payment_id,
            ride_id=p.ride_id,
            amount=p.amount,
            currency=p.currency,
            status=p.status,
            created_at=p.created_at,
        )
        for p in payments
    ]
