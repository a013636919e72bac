from datetime import date, timedelta

import pytest

from models import UtilityBill, UtilityBillStatus, UtilityPayment
from services import utility_service
from services.errors import InvalidState
from tests.factories import add_property, add_room

BILLS_URL = "/api/owner/utility/bills"
PAYMENTS_URL = "/api/owner/utility/payments"


def _bill(property_id, type="water", amount=1500, month="2024-05", due_date=None):
     return {
          "propertyId": property_id,
          "month": month,
          "type": type,
          "amount": amount,
          "dueDate": (due_date or date.today() + timedelta(days=10)).isoformat(),
     }


def test_create_bill_issues_code_per_type(client, auth_headers, db):
     prop = add_property(db)

     water = client.post(BILLS_URL, json=_bill(prop.id), headers=auth_headers)
     power = client.post(BILLS_URL, json=_bill(prop.id, type="Electricity", amount=3200), headers=auth_headers)

     assert water.status_code == 201
     assert water.json()["billCode"] == "UBW0001"
     assert water.json()["status"] == "unpaid"
     assert water.json()["propertyName"] == "Lakeside House"
     assert power.status_code == 201
     assert power.json()["billCode"] == "UBE0001"
     assert power.json()["type"] == "electricity"


def test_create_bill_validation(client, auth_headers, db):
     prop = add_property(db)

     duplicate = client.post(BILLS_URL, json=_bill(prop.id), headers=auth_headers)
     assert duplicate.status_code == 201
     again = client.post(BILLS_URL, json=_bill(prop.id, amount=99), headers=auth_headers)
     assert again.status_code == 409
     assert again.json() == {"message": "A water bill already exists for this property in 2024-05."}

     negative = client.post(BILLS_URL, json=_bill(prop.id, type="electricity", amount=-1), headers=auth_headers)
     assert negative.status_code == 400
     assert negative.json() == {"message": "amount cannot be negative"}

     gas = client.post(BILLS_URL, json=_bill(prop.id, type="gas"), headers=auth_headers)
     assert gas.status_code == 400
     assert gas.json() == {"message": "type must be 'water' or 'electricity'"}

     unknown = client.post(BILLS_URL, json=_bill(prop.id + 50), headers=auth_headers)
     assert unknown.status_code == 404
     assert unknown.json() == {"message": "Property not found"}

     missing = client.post(BILLS_URL, json={"propertyId": prop.id, "type": "water"}, headers=auth_headers)
     assert missing.status_code == 400
     assert missing.json() == {"message": "propertyId, month, type, amount, dueDate required"}


def test_pay_bill(client, auth_headers, db):
     prop = add_property(db)
     bill = client.post(BILLS_URL, json=_bill(prop.id, amount=1800), headers=auth_headers).json()

     response = client.post(f"{BILLS_URL}/{bill['id']}/pay", json={}, headers=auth_headers)

     assert response.status_code == 201
     data = response.json()
     assert data["payment"]["paymentCode"] == "UPM001"
     assert data["payment"]["amountPaid"] == 1800
     assert data["payment"]["paymentMethod"] == "Cash"
     assert data["payment"]["type"] == "water"
     assert data["bill"]["status"] == "paid"

     again = client.post(f"{BILLS_URL}/{bill['id']}/pay", json={"paymentMethod": "Card"}, headers=auth_headers)
     assert again.status_code == 400
     assert again.json() == {"message": "Bill already paid"}

     missing = client.post(f"{BILLS_URL}/999/pay", json={}, headers=auth_headers)
     assert missing.status_code == 404


def test_list_bills_with_overdue_status(client, auth_headers, db):
     prop = add_property(db)
     late = date.today() - timedelta(days=3)
     client.post(BILLS_URL, json=_bill(prop.id, due_date=late), headers=auth_headers)
     client.post(BILLS_URL, json=_bill(prop.id, type="electricity"), headers=auth_headers)

     overdue = client.get(BILLS_URL, params={"status": "overdue"}, headers=auth_headers).json()
     assert [b["billCode"] for b in overdue] == ["UBW0001"]
     assert overdue[0]["derivedStatus"] == "overdue"
     assert overdue[0]["status"] == "unpaid"

     unpaid = client.get(BILLS_URL, params={"status": "unpaid"}, headers=auth_headers).json()
     assert [b["billCode"] for b in unpaid] == ["UBE0001"]

     by_type = client.get(BILLS_URL, params={"type": "electricity", "propertyId": prop.id}, headers=auth_headers)
     assert len(by_type.json()) == 1


def test_list_payments_by_bill_code(client, auth_headers, db):
     prop = add_property(db)
     water = client.post(BILLS_URL, json=_bill(prop.id), headers=auth_headers).json()
     power = client.post(BILLS_URL, json=_bill(prop.id, type="electricity"), headers=auth_headers).json()
     client.post(f"{BILLS_URL}/{water['id']}/pay", json={}, headers=auth_headers)
     client.post(f"{BILLS_URL}/{power['id']}/pay", json={"paymentMethod": "Online"}, headers=auth_headers)

     by_code = client.get(PAYMENTS_URL, params={"billId": "ubw0001"}, headers=auth_headers).json()
     assert [p["billId"] for p in by_code] == [water["id"]]

     by_id = client.get(PAYMENTS_URL, params={"billId": str(power["id"])}, headers=auth_headers).json()
     assert [p["paymentMethod"] for p in by_id] == ["Online"]

     assert client.get(PAYMENTS_URL, params={"billId": "UBW9999"}, headers=auth_headers).json() == []
     assert len(client.get(PAYMENTS_URL, params={"month": "2024-05"}, headers=auth_headers).json()) == 2


def test_utility_bills_feed_rent_invoices(client, auth_headers, db, future_due_date):
     prop = add_property(db)
     add_room(db, prop, ["t1", "t2", "t3"], base_rent=5000)
     client.post(BILLS_URL, json=_bill(prop.id, amount=1000), headers=auth_headers)
     client.post(BILLS_URL, json=_bill(prop.id, type="electricity", amount=2001), headers=auth_headers)

     response = client.post(
          "/api/owner/rent/generate",
          json={"month": "2024-05", "dueDate": future_due_date.isoformat()},
          headers=auth_headers,
     )

     # 3001 / 3 = 1000.33 each; paid or not, every bill of the month counts
     assert [i["utilityShare"] for i in response.json()["invoices"]] == [1000, 1000, 1000]


@pytest.mark.parametrize("month", ["2024-05\n", "2024-05 "])
def test_padded_month_is_rejected(client, auth_headers, db, month):
     prop = add_property(db)
     client.post(BILLS_URL, json=_bill(prop.id), headers=auth_headers)

     response = client.post(BILLS_URL, json=_bill(prop.id, month=month), headers=auth_headers)
     assert response.status_code == 400
     assert response.json() == {"message": "month must be YYYY-MM"}

     listed = client.get(BILLS_URL, params={"month": month}, headers=auth_headers)
     assert listed.status_code == 400
     assert len(client.get(BILLS_URL, headers=auth_headers).json()) == 1


def test_pay_bill_loses_to_concurrent_payment(db, session_factory):
     prop = add_property(db)
     bill = utility_service.create_bill(
          db,
          property_id=prop.id,
          month="2024-05",
          type="water",
          amount=1800,
          due_date=date.today() + timedelta(days=10),
     )
     db.commit()

     other = session_factory()
     utility_service.pay_bill(other, bill.id)
     other.commit()
     other.close()

     # this session still holds the bill as unpaid
     assert db.get(UtilityBill, bill.id).status == UtilityBillStatus.UNPAID
     with pytest.raises(InvalidState, match="Bill already paid"):
          utility_service.pay_bill(db, bill.id)

     assert db.query(UtilityPayment).count() == 1
