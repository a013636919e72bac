import pytest

import config
from tests.factories import add_user, make_token

GENERATE_URL = "/api/owner/rent/generate"
INVOICES_URL = "/api/owner/rent/invoices"
RECEIPT_URL = "/api/owner/rent/receipt"


def _generate(client, headers, due_date, month="2024-05", **extra):
     body = {"month": month, "dueDate": due_date.isoformat(), **extra}
     return client.post(GENERATE_URL, json=body, headers=headers)


def test_generate_returns_camel_case_invoices(client, auth_headers, may_2024, future_due_date):
     response = _generate(client, auth_headers, future_due_date)

     assert response.status_code == 200
     data = response.json()
     assert data["createdCount"] == 2
     first = data["invoices"][0]
     assert first["invoiceCode"] == "INV001"
     assert first["tenantId"] == "t1"
     assert first["baseRent"] == 10000
     assert first["utilityShare"] == 1000
     assert first["mealCost"] == 15
     assert first["total"] == 11015
     assert first["status"] == "pending"
     assert first["derivedStatus"] == "pending"
     assert first["dueDate"] == future_due_date.isoformat()
     assert first["propertyName"] == "Lakeside House"
     assert first["roomNumber"] == "A-101"
     assert data["invoices"][1]["total"] == 11000


def test_generate_is_idempotent(client, auth_headers, may_2024, future_due_date):
     first = _generate(client, auth_headers, future_due_date).json()
     second = _generate(client, auth_headers, future_due_date).json()

     assert second["createdCount"] == 0
     assert [i["invoiceCode"] for i in second["invoices"]] == [i["invoiceCode"] for i in first["invoices"]]


def test_generate_without_occupants(client, auth_headers, future_due_date):
     response = _generate(client, auth_headers, future_due_date)

     assert response.status_code == 200
     assert response.json() == {"createdCount": 0, "invoices": [], "message": "No occupants found"}


@pytest.mark.parametrize("body, message", [
     ({"month": "2024-13", "dueDate": "2099-01-01"}, "month must be YYYY-MM"),
     ({"dueDate": "2099-01-01"}, "month must be YYYY-MM"),
     ({"month": "2024-05"}, "dueDate required"),
     ({"month": "2024-05", "dueDate": "2000-01-01"}, "dueDate cannot be in the past"),
])
def test_generate_validation_errors(client, auth_headers, may_2024, body, message):
     response = client.post(GENERATE_URL, json=body, headers=auth_headers)

     assert response.status_code == 400
     assert response.json() == {"message": message}


def test_generate_rejects_unparseable_due_date(client, auth_headers, may_2024):
     response = client.post(GENERATE_URL, json={"month": "2024-05", "dueDate": "soon"}, headers=auth_headers)

     assert response.status_code == 400
     assert "dueDate" in response.json()["message"]


def test_list_invoices_with_filters(client, auth_headers, may_2024, future_due_date):
     _generate(client, auth_headers, future_due_date)

     response = client.get(INVOICES_URL, params={"tenantId": "t2", "month": "2024-05"}, headers=auth_headers)
     assert response.status_code == 200
     assert [i["tenantId"] for i in response.json()] == ["t2"]

     response = client.get(INVOICES_URL, params={"status": "unpaid"}, headers=auth_headers)
     assert len(response.json()) == 2

     response = client.get(INVOICES_URL, params={"propertyId": may_2024["property"].id + 1}, headers=auth_headers)
     assert response.json() == []


def test_list_invoices_newest_first(client, auth_headers, may_2024, future_due_date):
     _generate(client, auth_headers, future_due_date, month="2024-04")
     _generate(client, auth_headers, future_due_date, month="2024-05")

     months = [i["month"] for i in client.get(INVOICES_URL, headers=auth_headers).json()]
     assert months == ["2024-05", "2024-05", "2024-04", "2024-04"]


def test_record_receipt(client, auth_headers, may_2024, future_due_date):
     invoice = _generate(client, auth_headers, future_due_date).json()["invoices"][0]

     response = client.post(
          RECEIPT_URL,
          json={"invoiceId": invoice["id"], "amountPaid": 11015, "paymentMethod": "Bank Transfer"},
          headers=auth_headers,
     )

     assert response.status_code == 201
     data = response.json()
     assert data["payment"]["paymentCode"] == "PMT001"
     assert data["payment"]["amountPaid"] == 11015
     assert data["payment"]["paymentMethod"] == "Bank Transfer"
     assert data["payment"]["invoiceId"] == invoice["id"]
     assert data["invoice"]["status"] == "paid"
     assert data["invoice"]["derivedStatus"] == "paid"

     payments = client.get("/api/owner/rent/payments", params={"tenantId": "t1"}, headers=auth_headers).json()
     assert [p["paymentCode"] for p in payments] == ["PMT001"]

     paid = client.get(INVOICES_URL, params={"status": "paid"}, headers=auth_headers).json()
     assert [i["id"] for i in paid] == [invoice["id"]]


def test_receipt_errors(client, auth_headers, may_2024, future_due_date):
     invoice = _generate(client, auth_headers, future_due_date).json()["invoices"][0]

     partial = client.post(
          RECEIPT_URL,
          json={"invoiceId": invoice["id"], "amountPaid": 5000, "paymentMethod": "Cash"},
          headers=auth_headers,
     )
     assert partial.status_code == 400
     assert partial.json() == {"message": "Partial payments are not allowed"}

     missing = client.post(RECEIPT_URL, json={"invoiceId": invoice["id"]}, headers=auth_headers)
     assert missing.status_code == 400
     assert missing.json() == {"message": "invoiceId, amountPaid, paymentMethod required"}

     unknown = client.post(
          RECEIPT_URL,
          json={"invoiceId": 999, "amountPaid": 1, "paymentMethod": "Cash"},
          headers=auth_headers,
     )
     assert unknown.status_code == 404
     assert unknown.json() == {"message": "Invoice not found"}

     bad_method = client.post(
          RECEIPT_URL,
          json={"invoiceId": invoice["id"], "amountPaid": 11015, "paymentMethod": "Bitcoin"},
          headers=auth_headers,
     )
     assert bad_method.status_code == 400

     body = {"invoiceId": invoice["id"], "amountPaid": 11015, "paymentMethod": "Cash"}
     assert client.post(RECEIPT_URL, json=body, headers=auth_headers).status_code == 201
     again = client.post(RECEIPT_URL, json=body, headers=auth_headers)
     assert again.status_code == 400
     assert again.json() == {"message": "Invoice already paid"}


def test_delete_invoice(client, auth_headers, may_2024, future_due_date):
     t1, t2 = _generate(client, auth_headers, future_due_date).json()["invoices"]
     client.post(
          RECEIPT_URL,
          json={"invoiceId": t1["id"], "amountPaid": t1["total"], "paymentMethod": "Cash"},
          headers=auth_headers,
     )

     paid = client.delete(f"{INVOICES_URL}/{t1['id']}", headers=auth_headers)
     assert paid.status_code == 400
     assert paid.json() == {"message": "Cannot delete a paid invoice"}

     assert client.delete(f"{INVOICES_URL}/{t2['id']}", headers=auth_headers).status_code == 204
     assert client.delete(f"{INVOICES_URL}/{t2['id']}", headers=auth_headers).status_code == 404

     # the deleted invoice is generated again on the next run
     rerun = _generate(client, auth_headers, future_due_date).json()
     assert rerun["createdCount"] == 1
     assert rerun["invoices"][1]["invoiceCode"] == "INV003"


def test_tenant_summary(client, auth_headers, may_2024, future_due_date):
     _generate(client, auth_headers, future_due_date)

     response = client.get("/api/owner/rent/tenants/t1/summary", headers=auth_headers)

     assert response.status_code == 200
     data = response.json()
     assert data["tenantId"] == "t1"
     assert data["totalOwed"] == 11015
     assert data["pendingCount"] == 1
     assert data["paidCount"] == 0


def test_invoice_and_receipt_emails(client, auth_headers, db, may_2024, future_due_date, monkeypatch):
     add_user(db, "t1", "t1@example.com")
     sent = []

     class FakeResponse:
          status_code = 201
          text = ""

     def fake_post(url, headers=None, json=None, timeout=None):
          sent.append(json)
          return FakeResponse()

     monkeypatch.setattr(config, "BREVO_API_KEY", "test-key")
     monkeypatch.setattr("utils.email.requests.post", fake_post)

     invoices = _generate(client, auth_headers, future_due_date).json()["invoices"]
     # t2 has no user record, so only t1 is emailed
     assert [m["to"] for m in sent] == [[{"email": "t1@example.com"}]]
     assert "INV001" in sent[0]["subject"]

     client.post(
          RECEIPT_URL,
          json={"invoiceId": invoices[0]["id"], "amountPaid": 11015, "paymentMethod": "Cash"},
          headers=auth_headers,
     )
     assert len(sent) == 2
     assert "PMT001" in sent[1]["htmlContent"]


def test_email_failure_does_not_fail_request(client, auth_headers, db, may_2024, future_due_date, monkeypatch):
     add_user(db, "t1", "t1@example.com")

     def failing_post(*args, **kwargs):
          raise ConnectionError("mail server down")

     monkeypatch.setattr(config, "BREVO_API_KEY", "test-key")
     monkeypatch.setattr("utils.email.requests.post", failing_post)

     response = _generate(client, auth_headers, future_due_date)

     assert response.status_code == 200
     assert response.json()["createdCount"] == 2


def test_routes_require_owner(client, may_2024):
     missing = client.get(INVOICES_URL)
     assert missing.status_code == 401
     assert missing.json() == {"message": "Missing token"}

     invalid = client.get(INVOICES_URL, headers={"Authorization": "Bearer not-a-jwt"})
     assert invalid.status_code == 403
     assert invalid.json() == {"message": "Invalid token"}

     tenant = client.get(INVOICES_URL, headers={"Authorization": f"Bearer {make_token(role='tenant', user_id='t1')}"})
     assert tenant.status_code == 403

     admin = client.get(INVOICES_URL, headers={"Authorization": f"Bearer {make_token(role='admin')}"})
     assert admin.status_code == 200
