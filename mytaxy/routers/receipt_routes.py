# mytaxy/routers/receipt_routes.py
"""
Receipt routes: generate a receipt for a completed ride, fetch one, list a
rider's receipts and download the PDF copy.
"""
import logging
import os
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import FileResponse

from mytaxy.auth import get_current_account, get_current_user
from mytaxy.database.schemas import GenerateReceiptRequest, ReceiptListResponse, ReceiptResponse
from mytaxy.database.stores import ReceiptStore, RideStore, get_receipt_store, get_ride_store
from mytaxy.services import receipt_service
from mytaxy.services.errors import ServiceError
from mytaxy.services.pdf_generator import generate_receipt_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receipts", tags=["Receipts"])


def _to_http(e: ServiceError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


def _generate(ride_id: int, account: Any, rides: RideStore, receipts: ReceiptStore) -> ReceiptResponse:
    try:
        receipt = receipt_service.generate_receipt(ride_id, rides, receipts, requester=account)
        return receipt_service.receipt_to_response(receipt)
    except ServiceError as e:
        raise _to_http(e)
    except Exception:
        logger.exception("Unexpected error generating receipt for ride %s", ride_id)
        raise HTTPException(status_code=500, detail="Error generating receipt")


# -------------------- Generate --------------------
@router.post("", status_code=status.HTTP_201_CREATED, response_model=ReceiptResponse)
def create_receipt(
    body: GenerateReceiptRequest,
    account: Any = Depends(get_current_account),
    rides: RideStore = Depends(get_ride_store),
    receipts: ReceiptStore = Depends(get_receipt_store),
):
    """Generate the receipt for a completed ride. Body: {"rideId": <id>}."""
    return _generate(body.ride_id, account, rides, receipts)


@router.post("/generate/{ride_id}", status_code=status.HTTP_201_CREATED, response_model=ReceiptResponse)
def generate_receipt_for_ride(
    ride_id: int,
    account: Any = Depends(get_current_account),
    rides: RideStore = Depends(get_ride_store),
    receipts: ReceiptStore = Depends(get_receipt_store),
):
    return _generate(ride_id, account, rides, receipts)


# -------------------- List --------------------
@router.get("/user/all", response_model=ReceiptListResponse)
def list_my_receipts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: Any = Depends(get_current_user),
    receipts: ReceiptStore = Depends(get_receipt_store),
):
    try:
        return receipt_service.list_user_receipts(user.id, receipts, page=page, limit=limit)
    except Exception:
        logger.exception("Error fetching receipts for user %s", user.id)
        raise HTTPException(status_code=500, detail="Error fetching receipts")


# -------------------- Fetch --------------------
@router.get("/ride/{ride_id}", response_model=ReceiptResponse)
def get_receipt_for_ride(
    ride_id: int,
    account: Any = Depends(get_current_account),
    receipts: ReceiptStore = Depends(get_receipt_store),
):
    """Fetch the receipt already issued for a ride."""
    try:
        receipt = receipt_service.get_receipt_for_ride(ride_id, account, receipts)
    except ServiceError as e:
        raise _to_http(e)
    return receipt_service.receipt_to_response(receipt)


@router.get("/{receipt_id}", response_model=ReceiptResponse)
def get_receipt(
    receipt_id: int,
    account: Any = Depends(get_current_account),
    receipts: ReceiptStore = Depends(get_receipt_store),
):
    try:
        receipt = receipt_service.get_receipt(receipt_id, account, receipts)
    except ServiceError as e:
        raise _to_http(e)
    return receipt_service.receipt_to_response(receipt)


@router.get("/{receipt_id}/receipt.pdf")
def download_receipt(
    receipt_id: int,
    account: Any = Depends(get_current_account),
    receipts: ReceiptStore = Depends(get_receipt_store),
):
    try:
        receipt = receipt_service.get_receipt(receipt_id, account, receipts)
    except ServiceError as e:
        raise _to_http(e)

    try:
        pdf_path = generate_receipt_pdf(receipt)
    except Exception:
        logger.exception("Receipt PDF generation failed for receipt %s", receipt_id)
        raise HTTPException(status_code=500, detail="Error generating receipt PDF")

    if not os.path.exists(pdf_path):
        raise HTTPException(status_code=404, detail="Receipt PDF not found")

    filename = f"receipt-{receipt.receipt_number}.pdf"
    return FileResponse(
        path=pdf_path,
        media_type="application/pdf",
        filename=filename,
    )
