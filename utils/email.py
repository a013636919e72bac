# utils/email.py
import requests

import config


def _send_email(to_email: str, subject: str, html_content: str):
     if not config.BREVO_API_KEY:
          raise RuntimeError("BREVO_API_KEY is not set")

     response = requests.post(
          config.BREVO_API_URL,
          headers={
               "api-key": config.BREVO_API_KEY,
               "Content-Type": "application/json",
          },
          json={
               "sender": {"name": config.EMAIL_SENDER_NAME, "email": config.EMAIL_SENDER},
               "to": [{"email": to_email}],
               "subject": subject,
               "htmlContent": html_content,
          },
          timeout=10,
     )
     if response.status_code not in (200, 201):
          raise RuntimeError(f"Brevo error: {response.text}")


def send_invoice_email(to_email: str, invoice_code: str, month: str, total: int, due_date: str):
     _send_email(
          to_email,
          f"Rent invoice {invoice_code} for {month}",
          f"""
               <h2>Your rent invoice for {month}</h2>
               <p>Invoice <strong>{invoice_code}</strong></p>
               <h1 style="color:#3498db">{total}</h1>
               <p>Please pay the full amount by {due_date}. Partial payments are not accepted.</p>
          """,
     )


def send_payment_receipt_email(to_email: str, payment_code: str, invoice_code: str, amount_paid: int, payment_method: str):
     _send_email(
          to_email,
          f"Payment received for {invoice_code}",
          f"""
               <h2>Payment received</h2>
               <p>Receipt <strong>{payment_code}</strong> for invoice {invoice_code}</p>
               <p>Amount: {amount_paid} ({payment_method})</p>
               <p>Thank you.</p>
          """,
     )
