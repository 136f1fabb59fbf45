# mytaxy/database/schemas.py
# =========================================================
# 🧩 Receipt & Payment Schemas (Pydantic v2 Compatible)
# =========================================================

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


# =========================================================
# ✅ Base Config for ORM Compatibility (Pydantic v2)
# =========================================================
class ConfigModel(BaseModel):
    class Config:
        from_attributes = True
        populate_by_name = True


# =========================================================
# 👤 Account summaries (denormalized onto receipts)
# =========================================================
class UserSummary(ConfigModel):
    id: int
    fullname: str
    email: str
    phone: Optional[str] = None


class CaptainVehicle(ConfigModel):
    color: Optional[str] = None
    plate: Optional[str] = None
    vehicle_type: Optional[str] = Field(None, alias="vehicleType")


class CaptainSummary(ConfigModel):
    id: int
    fullname: str
    phone: Optional[str] = None
    vehicle: CaptainVehicle


# =========================================================
# 🧾 Receipt snapshot parts
# =========================================================
class PaymentSnapshot(ConfigModel):
    amount: float
    method: str
    status: str
    transaction_id: Optional[str] = Field(None, alias="transactionId")
    payment_date: datetime = Field(..., alias="paymentDate")


class LocationSnapshot(ConfigModel):
    address: Optional[str] = None
    coordinates: Optional[str] = None


class RideDetails(ConfigModel):
    pickup: LocationSnapshot
    destination: LocationSnapshot
    distance: float = 0
    duration: float = 0
    vehicle_type: Optional[str] = Field(None, alias="vehicleType")
    start_time: Optional[datetime] = Field(None, alias="startTime")
    end_time: Optional[datetime] = Field(None, alias="endTime")


class CompanyDetails(ConfigModel):
    name: str
    address: str
    phone: str
    email: str
    gstin: str


class ReceiptSnapshot(ConfigModel):
    """The value built from a ride before it is persisted."""
    ride_id: int = Field(..., alias="ride")
    user_id: int = Field(..., alias="user")
    captain_id: int = Field(..., alias="captain")
    payment: PaymentSnapshot
    ride_details: RideDetails = Field(..., alias="rideDetails")


# =========================================================
# 📤 Receipt responses
# =========================================================
class ReceiptResponse(ConfigModel):
    id: int
    receipt_number: str = Field(..., alias="receiptNumber")
    ride: int
    user: UserSummary
    captain: CaptainSummary
    payment: PaymentSnapshot
    ride_details: RideDetails = Field(..., alias="rideDetails")
    company_details: CompanyDetails = Field(..., alias="companyDetails")
    pdf_url: Optional[str] = Field(None, alias="pdfUrl")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class ReceiptListResponse(ConfigModel):
    receipts: List[ReceiptResponse]
    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    total_receipts: int = Field(..., alias="totalReceipts")


class GenerateReceiptRequest(ConfigModel):
    ride_id: int = Field(..., alias="rideId")


# =========================================================
# 💳 Payment Schemas
# =========================================================
class CreateOrderRequest(ConfigModel):
    ride_id: int = Field(..., alias="rideId")
    amount: Optional[float] = Field(None, gt=0, description="Amount in rupees; defaults to the ride fare")


class CreateOrderResponse(ConfigModel):
    key_id: Optional[str] = None
    order_id: str
    amount: int  # paise
    currency: str
    ride_id: int = Field(..., alias="rideId")


class VerifyPaymentRequest(ConfigModel):
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str
    ride_id: int = Field(..., alias="rideId")


class VerifyPaymentResponse(ConfigModel):
    success: bool
    message: str
    payment_id: str = Field(..., alias="paymentId")
    ride_id: int = Field(..., alias="rideId")


class PaymentRecord(ConfigModel):
    id: int
    order_id: str = Field(..., alias="orderId")
    payment_id: Optional[str] = Field(None, alias="paymentId")
    ride_id: int = Field(..., alias="rideId")
    amount: int  # paise
    currency: str
    status: str
    created_at: Optional[datetime] = Field(None, alias="createdAt")


# =========================================================
# 🚕 Ride Schemas
# =========================================================
class EndRideRequest(ConfigModel):
    ride_id: int = Field(..., alias="rideId")


class RideStatusResponse(ConfigModel):
    id: int
    status: str
    fare: Optional[float] = None
    distance: Optional[float] = None
    duration: Optional[float] = None
    end_time: Optional[datetime] = Field(None, alias="endTime")
    payment_method: Optional[str] = Field(None, alias="paymentMethod")
    payment_status: Optional[str] = Field(None, alias="paymentStatus")


class CashPaymentResponse(ConfigModel):
    success: bool
    message: str
