"""
Unit tests for the receipt eligibility gate
"""

from types import SimpleNamespace

import pytest

from mytaxy.services.payment_gate import (
    PAYMENT_NOT_COMPLETED,
    RECEIPT_ALREADY_EXISTS,
    RIDE_NOT_COMPLETED,
    check_receipt_eligibility,
)


def ride(**fields):
    defaults = {"status": "completed", "payment_method": "razorpay", "payment_status": "completed"}
    defaults.update(fields)
    return SimpleNamespace(**defaults)


class TestRideStatusRule:

    @pytest.mark.parametrize("status", ["pending", "accepted", "ongoing", "cancelled", None])
    def test_unfinished_ride_is_rejected(self, status):
        """Any ride that is not completed is refused first"""
        decision = check_receipt_eligibility(ride(status=status), receipt_exists=False)
        assert not decision
        assert decision.reason == RIDE_NOT_COMPLETED

    def test_ride_status_checked_before_payment(self):
        decision = check_receipt_eligibility(
            ride(status="ongoing", payment_method="upi", payment_status="failed"), receipt_exists=True
        )
        assert decision.reason == RIDE_NOT_COMPLETED


class TestPaymentRule:

    @pytest.mark.parametrize("payment_status", ["pending", "failed", "completed", None])
    def test_cash_bypasses_payment_status(self, payment_status):
        """Cash is settled on delivery"""
        decision = check_receipt_eligibility(
            ride(payment_method="cash", payment_status=payment_status), receipt_exists=False
        )
        assert decision
        assert decision.reason is None

    @pytest.mark.parametrize("method", ["razorpay", "card", "wallet", "upi"])
    @pytest.mark.parametrize("payment_status", ["pending", "failed", None])
    def test_unpaid_non_cash_ride_is_rejected(self, method, payment_status):
        decision = check_receipt_eligibility(
            ride(payment_method=method, payment_status=payment_status), receipt_exists=False
        )
        assert not decision
        assert decision.reason == PAYMENT_NOT_COMPLETED

    def test_paid_card_ride_is_eligible(self):
        assert check_receipt_eligibility(ride(), receipt_exists=False).eligible is True


class TestExistingReceiptRule:

    def test_existing_receipt_is_rejected(self):
        decision = check_receipt_eligibility(ride(), receipt_exists=True)
        assert not decision
        assert decision.reason == RECEIPT_ALREADY_EXISTS

    def test_payment_checked_before_existing_receipt(self):
        decision = check_receipt_eligibility(ride(payment_status="pending"), receipt_exists=True)
        assert decision.reason == PAYMENT_NOT_COMPLETED
