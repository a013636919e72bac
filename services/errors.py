# services/errors.py
"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; main.py renders every
BillingError as {"message": ...} with that status.
"""


class BillingError(Exception):
     status_code = 500

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message


class ValidationError(BillingError):
     """Malformed input or a rule violation such as a partial payment."""
     status_code = 400


class NotFound(BillingError):
     status_code = 404


class InvalidState(BillingError):
     """The document is in a state that forbids the transition (e.g. already paid)."""
     status_code = 400


class Conflict(BillingError):
     status_code = 409
