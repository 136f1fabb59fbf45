# mytaxy/database/models.py
from sqlalchemy import CheckConstraint, Column, Integer, String, DateTime, ForeignKey, Float
from sqlalchemy.orm import relationship
from datetime import datetime
from mytaxy.database.database import Base

# ==========================
# ✅ USER MODEL
# ==========================
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    fullname = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    phone = Column(String(15), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    rides = relationship("Ride", back_populates="user")
    receipts = relationship("Receipt", back_populates="user")

    role = "user"

# ==========================
# ✅ CAPTAIN MODEL
# ==========================
class Captain(Base):
    __tablename__ = "captains"

    id = Column(Integer, primary_key=True, index=True)
    fullname = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    phone = Column(String(15), nullable=True)
    vehicle_color = Column(String(30), nullable=True)
    vehicle_plate = Column(String(20), nullable=True)
    vehicle_type = Column(String(20), nullable=True)  # car, motorcycle, bike
    created_at = Column(DateTime, default=datetime.utcnow)

    rides = relationship("Ride", back_populates="captain")
    receipts = relationship("Receipt", back_populates="captain")

    role = "captain"

# ==========================
# ✅ RIDE MODEL
# ==========================
class Ride(Base):
    __tablename__ = "rides"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    captain_id = Column(Integer, ForeignKey("captains.id"), nullable=True, index=True)
    pickup = Column(String(100), nullable=False)  # "lat,lng"
    destination = Column(String(100), nullable=False)  # "lat,lng"
    pickup_address = Column(String(255), nullable=False)
    destination_address = Column(String(255), nullable=False)
    vehicle_type = Column(String(20), nullable=False)  # car, motorcycle, bike
    status = Column(String(20), nullable=False, default="pending", index=True)  # pending, accepted, ongoing, completed, cancelled
    booking_time = Column(DateTime, default=datetime.utcnow)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)
    distance = Column(Float, nullable=True, default=0)  # kilometers
    duration = Column(Float, nullable=True, default=0)  # minutes
    fare = Column(Float, nullable=True)
    payment_status = Column(String(20), nullable=True, default="pending")  # pending, completed, failed
    payment_method = Column(String(20), nullable=True, default="cash")  # cash, card, razorpay, wallet, upi
    payment_id = Column(String(100), nullable=True)  # Razorpay payment_id
    order_id = Column(String(100), nullable=True)  # Razorpay order_id
    signature = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="rides")
    captain = relationship("Captain", back_populates="rides")
    receipt = relationship("Receipt", back_populates="ride", uselist=False)

# ==========================
# ✅ RECEIPT MODEL - point-in-time snapshot of a completed ride
# ==========================
class Receipt(Base):
    __tablename__ = "receipts"
    __table_args__ = (
        CheckConstraint(
            "payment_method = 'cash' OR payment_transaction_id IS NOT NULL",
            name="ck_receipts_transaction_id",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    receipt_number = Column(String(20), unique=True, nullable=False, index=True)
    ride_id = Column(Integer, ForeignKey("rides.id"), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    captain_id = Column(Integer, ForeignKey("captains.id"), nullable=False)

    # payment snapshot
    payment_amount = Column(Float, nullable=False)
    payment_method = Column(String(20), nullable=False)  # cash, card, wallet, upi
    payment_status = Column(String(20), nullable=False)  # completed, pending, failed
    payment_transaction_id = Column(String(100), nullable=True)
    payment_date = Column(DateTime, nullable=False)

    # ride details snapshot
    pickup_address = Column(String(255), nullable=True)
    pickup_coordinates = Column(String(100), nullable=True)
    destination_address = Column(String(255), nullable=True)
    destination_coordinates = Column(String(100), nullable=True)
    distance = Column(Float, nullable=False, default=0)
    duration = Column(Float, nullable=False, default=0)
    vehicle_type = Column(String(20), nullable=True)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)

    # company details snapshot
    company_name = Column(String(100), nullable=False)
    company_address = Column(String(255), nullable=False)
    company_phone = Column(String(30), nullable=False)
    company_email = Column(String(100), nullable=False)
    company_gstin = Column(String(30), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow)

    ride = relationship("Ride", back_populates="receipt")
    user = relationship("User", back_populates="receipts")
    captain = relationship("Captain", back_populates="receipts")
