# mytaxy/services/payment_gate.py
"""
Receipt eligibility rules for a ride.

The gate is a pure function: it reads the ride and a flag saying whether a
receipt already exists, and never touches the database itself.
"""
from dataclasses import dataclass
from typing import Any, Optional

RIDE_NOT_COMPLETED = "ride not completed"
PAYMENT_NOT_COMPLETED = "payment not completed"
RECEIPT_ALREADY_EXISTS = "receipt already exists"


@dataclass(frozen=True)
class GateDecision:
    eligible: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.eligible


ELIGIBLE = GateDecision(eligible=True)


def check_receipt_eligibility(ride: Any, receipt_exists: bool) -> GateDecision:
    """
    Decide whether ``ride`` may be issued a receipt.

    Rules are checked in order and the first failure wins:
      1. the ride must be completed
      2. the payment must be completed, unless it was paid in cash
      3. no receipt may already reference the ride
    """
    if getattr(ride, "status", None) != "completed":
        return GateDecision(eligible=False, reason=RIDE_NOT_COMPLETED)

    # cash is settled on delivery, so its payment status is not checked
    if getattr(ride, "payment_status", None) != "completed" and getattr(ride, "payment_method", None) != "cash":
        return GateDecision(eligible=False, reason=PAYMENT_NOT_COMPLETED)

    if receipt_exists:
        return GateDecision(eligible=False, reason=RECEIPT_ALREADY_EXISTS)

    return ELIGIBLE
