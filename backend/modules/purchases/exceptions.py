"""
Purchases module exceptions.
"""

from shared.exceptions import ValidationError


class MissingPurchaseEmailError(ValidationError):
    """Raised when a purchase ping has no buyer email."""

    def __init__(self):
        super().__init__("No email provided by purchase ping", code="MISSING_EMAIL")
