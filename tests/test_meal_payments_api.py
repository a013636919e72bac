from datetime import date, timedelta

import pytest

from models import MealInvoice, MealInvoiceStatus, MealPayment, PaymentMethod
from services import meal_service
from services.errors import InvalidState

INVOICES_URL = "/api/owner/meal-payments/invoices"
PAYMENTS_URL = "/api/owner/meal-payments/payments"


def _invoice(client, headers, supplier_id="sup1", month="2024-05", amount_cents=126000, **extra):
     body = {"month": month, "supplierId": supplier_id, "amountCents": amount_cents, "orderCount": 42, **extra}
     return client.post(INVOICES_URL, json=body, headers=headers)


def test_create_meal_invoice(client, auth_headers):
     response = _invoice(client, auth_headers, dueDate="2024-06-10")

     assert response.status_code == 201
     data = response.json()
     assert data["invoiceCode"] == "MINV001"
     assert data["supplierId"] == "sup1"
     assert data["amountCents"] == 126000
     assert data["orderCount"] == 42
     assert data["status"] == "unpaid"
     assert data["overdue"] is True

     assert _invoice(client, auth_headers, supplier_id="sup2").json()["invoiceCode"] == "MINV002"


def test_create_meal_invoice_validation(client, auth_headers):
     missing = client.post(INVOICES_URL, json={"month": "2024-05"}, headers=auth_headers)
     assert missing.status_code == 400
     assert missing.json() == {"message": "month, supplierId, amountCents required"}

     bad_month = _invoice(client, auth_headers, month="2024-05\n")
     assert bad_month.status_code == 400
     assert bad_month.json() == {"message": "month must be YYYY-MM"}

     negative = _invoice(client, auth_headers, amount_cents=-1)
     assert negative.status_code == 400
     assert negative.json() == {"message": "amountCents cannot be negative"}


def test_list_meal_invoices_with_filters(client, auth_headers):
     _invoice(client, auth_headers, supplier_id="sup1", month="2024-04")
     _invoice(client, auth_headers, supplier_id="sup1", month="2024-05")
     _invoice(client, auth_headers, supplier_id="sup2", month="2024-05")

     newest_first = client.get(INVOICES_URL, headers=auth_headers).json()
     assert [i["invoiceCode"] for i in newest_first] == ["MINV003", "MINV002", "MINV001"]

     may = client.get(INVOICES_URL, params={"month": "2024-05", "supplierId": "sup1"}, headers=auth_headers)
     assert [i["invoiceCode"] for i in may.json()] == ["MINV002"]

     assert client.get(INVOICES_URL, params={"status": "paid"}, headers=auth_headers).json() == []

     bad_month = client.get(INVOICES_URL, params={"month": "May"}, headers=auth_headers)
     assert bad_month.status_code == 400
     assert bad_month.json() == {"message": "month must be YYYY-MM"}

     bad_status = client.get(INVOICES_URL, params={"status": "overdue"}, headers=auth_headers)
     assert bad_status.status_code == 400


def test_pay_meal_invoice(client, auth_headers):
     invoice = _invoice(client, auth_headers).json()

     response = client.post(
          PAYMENTS_URL,
          json={"invoiceId": invoice["id"], "paymentMethod": "Bank Transfer", "notes": "May meals"},
          headers=auth_headers,
     )

     assert response.status_code == 201
     data = response.json()
     assert data["payment"]["paymentCode"] == "MPMT001"
     assert data["payment"]["amountCents"] == 126000
     assert data["payment"]["supplierId"] == "sup1"
     assert data["payment"]["paymentMethod"] == "Bank Transfer"
     assert data["payment"]["notes"] == "May meals"
     assert data["invoice"]["status"] == "paid"
     assert data["invoice"]["overdue"] is False

     paid = client.get(INVOICES_URL, params={"status": "paid"}, headers=auth_headers).json()
     assert [i["id"] for i in paid] == [invoice["id"]]


def test_pay_meal_invoice_errors(client, auth_headers):
     invoice = _invoice(client, auth_headers).json()

     missing = client.post(PAYMENTS_URL, json={"invoiceId": invoice["id"]}, headers=auth_headers)
     assert missing.status_code == 400
     assert missing.json() == {"message": "invoiceId, paymentMethod required"}

     unknown = client.post(PAYMENTS_URL, json={"invoiceId": 999, "paymentMethod": "Cash"}, headers=auth_headers)
     assert unknown.status_code == 404
     assert unknown.json() == {"message": "Invoice not found"}

     bad_method = client.post(
          PAYMENTS_URL,
          json={"invoiceId": invoice["id"], "paymentMethod": "Bitcoin"},
          headers=auth_headers,
     )
     assert bad_method.status_code == 400

     body = {"invoiceId": invoice["id"], "paymentMethod": "Cash"}
     assert client.post(PAYMENTS_URL, json=body, headers=auth_headers).status_code == 201
     again = client.post(PAYMENTS_URL, json=body, headers=auth_headers)
     assert again.status_code == 400
     assert again.json() == {"message": "Invoice already paid"}


def test_list_meal_payments_by_invoice_month(client, auth_headers):
     april = _invoice(client, auth_headers, supplier_id="sup1", month="2024-04").json()
     may = _invoice(client, auth_headers, supplier_id="sup2", month="2024-05").json()
     for invoice in (april, may):
          client.post(PAYMENTS_URL, json={"invoiceId": invoice["id"], "paymentMethod": "Cash"}, headers=auth_headers)

     everything = client.get(PAYMENTS_URL, headers=auth_headers).json()
     assert [p["paymentCode"] for p in everything] == ["MPMT002", "MPMT001"]

     by_month = client.get(PAYMENTS_URL, params={"month": "2024-04"}, headers=auth_headers).json()
     assert [p["invoiceId"] for p in by_month] == [april["id"]]

     by_supplier = client.get(PAYMENTS_URL, params={"supplierId": "sup2"}, headers=auth_headers).json()
     assert [p["invoiceId"] for p in by_supplier] == [may["id"]]

     assert client.get(PAYMENTS_URL, params={"month": "2024-05\n"}, headers=auth_headers).status_code == 400


def test_meal_routes_require_owner(client):
     assert client.get(INVOICES_URL).status_code == 401
     assert client.get(PAYMENTS_URL).status_code == 401


def test_pay_meal_invoice_loses_to_concurrent_payment(db, session_factory):
     invoice = meal_service.create_invoice(
          db,
          month="2024-05",
          supplier_id="sup1",
          amount_cents=5000,
          due_date=date.today() + timedelta(days=10),
     )
     db.commit()

     other = session_factory()
     meal_service.pay_invoice(other, invoice.id, PaymentMethod.CASH)
     other.commit()
     other.close()

     # this session still holds the invoice as unpaid
     assert db.get(MealInvoice, invoice.id).status == MealInvoiceStatus.UNPAID
     with pytest.raises(InvalidState, match="Invoice already paid"):
          meal_service.pay_invoice(db, invoice.id, PaymentMethod.CARD)

     assert db.query(MealPayment).count() == 1
