"""
Tests for ending rides and confirming cash payments
"""

from datetime import datetime

import pytest

from conftest import CaptainFactory
from mytaxy.services import receipt_service, ride_service
from mytaxy.services.ride_service import RideError

FINISHED_AT = datetime(2024, 5, 1, 10, 15)


@pytest.fixture
def ongoing_ride(make_ride):
    return make_ride(status="ongoing", end_time=None, distance=6.0, duration=None, fare=199.999)


class TestEndRide:

    def test_completes_ongoing_ride(self, db_session, ongoing_ride, captain):
        ride = ride_service.end_ride(db_session, ongoing_ride.id, captain, now=FINISHED_AT)

        assert ride.status == "completed"
        assert ride.end_time == FINISHED_AT
        assert ride.duration == pytest.approx(5.0)
        assert ride.fare == 200.0

    def test_ride_without_distance(self, db_session, make_ride, captain):
        ride = make_ride(status="ongoing", end_time=None, distance=None)
        assert ride_service.end_ride(db_session, ride.id, captain).duration == 0

    @pytest.mark.parametrize("status", ["pending", "accepted", "completed", "cancelled"])
    def test_only_ongoing_rides_can_end(self, db_session, make_ride, captain, status):
        ride = make_ride(status=status)
        with pytest.raises(RideError) as exc:
            ride_service.end_ride(db_session, ride.id, captain)
        assert exc.value.status_code == 400
        assert exc.value.message == "Ride not ongoing"

    def test_other_captain(self, db_session, ongoing_ride):
        with pytest.raises(RideError) as exc:
            ride_service.end_ride(db_session, ongoing_ride.id, CaptainFactory())
        assert exc.value.status_code == 403
        db_session.refresh(ongoing_ride)
        assert ongoing_ride.status == "ongoing"

    def test_unknown_ride(self, db_session, captain):
        with pytest.raises(RideError) as exc:
            ride_service.end_ride(db_session, 404, captain)
        assert exc.value.status_code == 404

    def test_ended_ride_becomes_receipt_eligible(self, db_session, ongoing_ride, captain, rides, receipts):
        with pytest.raises(receipt_service.ReceiptNotEligible):
            receipt_service.generate_receipt(ongoing_ride.id, rides, receipts)

        ride_service.end_ride(db_session, ongoing_ride.id, captain, now=FINISHED_AT)
        receipt = receipt_service.generate_receipt(ongoing_ride.id, rides, receipts)

        assert receipt.payment_date == FINISHED_AT
        assert receipt.payment_amount == 200.0


class TestConfirmCashPayment:

    def test_marks_cash_paid(self, db_session, make_ride, captain):
        ride = make_ride(payment_method="upi", payment_status="pending")
        ride = ride_service.confirm_cash_payment(db_session, ride.id, captain)
        assert ride.payment_status == "completed"
        assert ride.payment_method == "cash"

    def test_does_not_override_online_payment(self, db_session, make_ride, captain):
        ride = make_ride(payment_method="razorpay", payment_status="completed", payment_id="pay_1")
        with pytest.raises(RideError):
            ride_service.confirm_cash_payment(db_session, ride.id, captain)
        db_session.refresh(ride)
        assert ride.payment_method == "razorpay"

    def test_other_captain(self, db_session, make_ride):
        ride = make_ride()
        with pytest.raises(RideError) as exc:
            ride_service.confirm_cash_payment(db_session, ride.id, CaptainFactory())
        assert exc.value.status_code == 403


class TestRideRoutes:

    def test_end_ride(self, client, ongoing_ride, captain, auth_headers):
        response = client.post("/api/rides/end-ride", json={"rideId": ongoing_ride.id}, headers=auth_headers(captain))
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "completed"
        assert body["fare"] == 200.0
        assert body["endTime"] is not None

    def test_end_ride_twice(self, client, ongoing_ride, captain, auth_headers):
        client.post("/api/rides/end-ride", json={"rideId": ongoing_ride.id}, headers=auth_headers(captain))
        response = client.post("/api/rides/end-ride", json={"rideId": ongoing_ride.id}, headers=auth_headers(captain))
        assert response.status_code == 400
        assert response.json() == {"message": "Ride not ongoing"}

    def test_end_ride_needs_captain(self, client, ongoing_ride, user, auth_headers):
        response = client.post("/api/rides/end-ride", json={"rideId": ongoing_ride.id}, headers=auth_headers(user))
        assert response.status_code == 403

    def test_cash_payment(self, client, make_ride, captain, auth_headers):
        ride = make_ride(payment_method="wallet", payment_status="pending")
        response = client.post(f"/api/rides/{ride.id}/cash-payment", headers=auth_headers(captain))
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Cash payment confirmed"}

    def test_cash_payment_unknown_ride(self, client, captain, auth_headers):
        response = client.post("/api/rides/9999/cash-payment", headers=auth_headers(captain))
        assert response.status_code == 404
        assert response.json() == {"message": "Ride not found"}

    def test_full_cash_flow(self, client, ongoing_ride, user, captain, auth_headers):
        client.post("/api/rides/end-ride", json={"rideId": ongoing_ride.id}, headers=auth_headers(captain))
        client.post(f"/api/rides/{ongoing_ride.id}/cash-payment", headers=auth_headers(captain))

        response = client.post("/api/receipts", json={"rideId": ongoing_ride.id}, headers=auth_headers(user))
        assert response.status_code == 201
        body = response.json()
        assert body["payment"]["method"] == "cash"
        assert body["payment"]["status"] == "completed"
        assert body["payment"]["transactionId"] is None
