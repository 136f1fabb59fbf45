# mytaxy/database/payment_models.py
"""
Payment-related database models
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime
from mytaxy.database.database import Base


class Payment(Base):
    """Razorpay transactions for a ride"""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String(100), unique=True, nullable=False, index=True)  # Razorpay order_id or dev id
    payment_id = Column(String(100), unique=True, nullable=True, index=True)  # Razorpay payment_id
    ride_id = Column(Integer, ForeignKey("rides.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(String(50), nullable=False, default="CREATED")  # CREATED, PAID, FAILED
    amount = Column(Integer, nullable=False)  # paise
    currency = Column(String(10), default="INR")
    razorpay_signature = Column(String(500), nullable=True)  # HMAC signature
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
