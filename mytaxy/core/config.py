"""
Application configuration and settings
"""
import os
from dotenv import load_dotenv

load_dotenv()

# Database Configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./mytaxy.db")

# JWT Configuration
SECRET_KEY = os.getenv("SECRET_KEY", "supersecretkey")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Razorpay Configuration
RAZORPAY_KEY_ID = os.getenv("RAZORPAY_KEY_ID", "")
RAZORPAY_KEY_SECRET = os.getenv("RAZORPAY_KEY_SECRET", "")
PAYMENT_GATEWAY = os.getenv("PAYMENT_GATEWAY", "razorpay")  # razorpay | fallback
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://127.0.0.1:8000")

# Receipt rendering
RECEIPTS_DIR = os.getenv(
    "RECEIPTS_DIR",
    os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "media", "receipts"),
)

# Company details stamped onto every receipt
COMPANY_NAME = os.getenv("COMPANY_NAME", "MyTaxy")
COMPANY_ADDRESS = os.getenv("COMPANY_ADDRESS", "123 Taxi Street, City, Country")
COMPANY_PHONE = os.getenv("COMPANY_PHONE", "+91 1234567890")
COMPANY_EMAIL = os.getenv("COMPANY_EMAIL", "support@mytaxy.com")
COMPANY_GSTIN = os.getenv("COMPANY_GSTIN", "GSTIN123456789")

# Comma-separated list of allowed origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]


class Settings:
    PROJECT_NAME: str = "MyTaxy API"
    VERSION: str = "1.0.0"
    DATABASE_URL = DATABASE_URL
    SECRET_KEY = SECRET_KEY
    ACCESS_TOKEN_EXPIRE_MINUTES = ACCESS_TOKEN_EXPIRE_MINUTES
    RAZORPAY_KEY_ID = RAZORPAY_KEY_ID
    RAZORPAY_KEY_SECRET = RAZORPAY_KEY_SECRET
    PAYMENT_GATEWAY = PAYMENT_GATEWAY
    PUBLIC_BASE_URL = PUBLIC_BASE_URL
    RECEIPTS_DIR = RECEIPTS_DIR
    COMPANY_NAME = COMPANY_NAME
    COMPANY_ADDRESS = COMPANY_ADDRESS
    COMPANY_PHONE = COMPANY_PHONE
    COMPANY_EMAIL = COMPANY_EMAIL
    COMPANY_GSTIN = COMPANY_GSTIN
    CORS_ORIGINS = CORS_ORIGINS

settings = Settings()
