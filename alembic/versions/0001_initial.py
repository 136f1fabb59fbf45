"""Initial schema: users, captains, rides, receipts, payments"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("fullname", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(15), nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "captains",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("fullname", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(15), nullable=True),
        sa.Column("vehicle_color", sa.String(30), nullable=True),
        sa.Column("vehicle_plate", sa.String(20), nullable=True),
        sa.Column("vehicle_type", sa.String(20), nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_captains_id", "captains", ["id"])
    op.create_index("ix_captains_email", "captains", ["email"], unique=True)

    op.create_table(
        "rides",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("captain_id", sa.Integer, sa.ForeignKey("captains.id"), nullable=True),
        sa.Column("pickup", sa.String(100), nullable=False),
        sa.Column("destination", sa.String(100), nullable=False),
        sa.Column("pickup_address", sa.String(255), nullable=False),
        sa.Column("destination_address", sa.String(255), nullable=False),
        sa.Column("vehicle_type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("booking_time", sa.DateTime, nullable=True),
        sa.Column("start_time", sa.DateTime, nullable=True),
        sa.Column("end_time", sa.DateTime, nullable=True),
        sa.Column("distance", sa.Float, nullable=True),
        sa.Column("duration", sa.Float, nullable=True),
        sa.Column("fare", sa.Float, nullable=True),
        sa.Column("payment_status", sa.String(20), nullable=True, server_default="pending"),
        sa.Column("payment_method", sa.String(20), nullable=True, server_default="cash"),
        sa.Column("payment_id", sa.String(100), nullable=True),
        sa.Column("order_id", sa.String(100), nullable=True),
        sa.Column("signature", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=True),
        sa.Column("updated_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_rides_id", "rides", ["id"])
    op.create_index("ix_rides_user_id", "rides", ["user_id"])
    op.create_index("ix_rides_captain_id", "rides", ["captain_id"])
    op.create_index("ix_rides_status", "rides", ["status"])

    op.create_table(
        "receipts",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("receipt_number", sa.String(20), nullable=False),
        sa.Column("ride_id", sa.Integer, sa.ForeignKey("rides.id"), nullable=False),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("captain_id", sa.Integer, sa.ForeignKey("captains.id"), nullable=False),
        sa.Column("payment_amount", sa.Float, nullable=False),
        sa.Column("payment_method", sa.String(20), nullable=False),
        sa.Column("payment_status", sa.String(20), nullable=False),
        sa.Column("payment_transaction_id", sa.String(100), nullable=True),
        sa.Column("payment_date", sa.DateTime, nullable=False),
        sa.Column("pickup_address", sa.String(255), nullable=True),
        sa.Column("pickup_coordinates", sa.String(100), nullable=True),
        sa.Column("destination_address", sa.String(255), nullable=True),
        sa.Column("destination_coordinates", sa.String(100), nullable=True),
        sa.Column("distance", sa.Float, nullable=False, server_default="0"),
        sa.Column("duration", sa.Float, nullable=False, server_default="0"),
        sa.Column("vehicle_type", sa.String(20), nullable=True),
        sa.Column("start_time", sa.DateTime, nullable=True),
        sa.Column("end_time", sa.DateTime, nullable=True),
        sa.Column("company_name", sa.String(100), nullable=False),
        sa.Column("company_address", sa.String(255), nullable=False),
        sa.Column("company_phone", sa.String(30), nullable=False),
        sa.Column("company_email", sa.String(100), nullable=False),
        sa.Column("company_gstin", sa.String(30), nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=True),
        sa.Column("updated_at", sa.DateTime, nullable=True),
        sa.CheckConstraint(
            "payment_method = 'cash' OR payment_transaction_id IS NOT NULL",
            name="ck_receipts_transaction_id",
        ),
    )
    op.create_index("ix_receipts_id", "receipts", ["id"])
    op.create_index("ix_receipts_receipt_number", "receipts", ["receipt_number"], unique=True)
    op.create_index("ix_receipts_ride_id", "receipts", ["ride_id"], unique=True)
    op.create_index("ix_receipts_user_id", "receipts", ["user_id"])
    op.create_index("ix_receipts_created_at", "receipts", ["created_at"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("order_id", sa.String(100), nullable=False),
        sa.Column("payment_id", sa.String(100), nullable=True),
        sa.Column("ride_id", sa.Integer, sa.ForeignKey("rides.id"), nullable=False),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="CREATED"),
        sa.Column("amount", sa.Integer, nullable=False),
        sa.Column("currency", sa.String(10), nullable=True, server_default="INR"),
        sa.Column("razorpay_signature", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=True),
        sa.Column("updated_at", sa.DateTime, nullable=True),
    )
    op.create_index("ix_payments_id", "payments", ["id"])
    op.create_index("ix_payments_order_id", "payments", ["order_id"], unique=True)
    op.create_index("ix_payments_payment_id", "payments", ["payment_id"], unique=True)
    op.create_index("ix_payments_ride_id", "payments", ["ride_id"])


def downgrade() -> None:
    op.drop_table("payments")
    op.drop_table("receipts")
    op.drop_table("rides")
    op.drop_table("captains")
    op.drop_table("users")
