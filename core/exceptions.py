"""Error taxonomy for the inventory transaction engine.

Every business-rule failure is a ``BackOfficeError`` subclass. The category
base classes carry the HTTP status used by the JSON boundary; concrete
errors carry structured fields and derive their machine-readable ``code``
from them (e.g. ``INSUFFICIENT_STOCK_7_Fender Stratocaster``).
"""


class BackOfficeError(Exception):
    """Base class for every error the engines raise on purpose."""

    code = "BACKOFFICE_ERROR"
    status = 500
    default_message = "Back-office operation failed."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)

    @property
    def wire_code(self) -> str:
        return self.code

    def details(self) -> dict:
        return {}

    def as_dict(self) -> dict:
        payload = {"error": self.wire_code, "message": str(self)}
        details = self.details()
        if details:
            payload["details"] = details
        return payload


# Categories

class ValidationFailed(BackOfficeError):
    """Caller can fix the input and resubmit."""
    status = 400


class NotFound(BackOfficeError):
    status = 404


class Conflict(BackOfficeError):
    """The request clashes with the current state. Never retried."""
    status = 409


class ConfigurationError(BackOfficeError):
    """Missing seeded reference data or settings. A deployment defect."""
    status = 500


class TransactionRequired(RuntimeError):
    """A repository was used outside of an open transaction."""


# Validation

class InvalidPayload(ValidationFailed):
    code = "INVALID_PAYLOAD"
    default_message = "Request body is not valid."

    def __init__(self, errors=None, message=None):
        super().__init__(message)
        self.errors = errors or {}

    def details(self):
        return dict(self.errors)


class EmptyLineList(ValidationFailed):
    code = "EMPTY_LINE_LIST"
    default_message = "An order needs at least one line."


class InvalidLineQuantity(ValidationFailed):
    code = "INVALID_LINE_QUANTITY"

    def __init__(self, product_id, quantity):
        self.product_id = product_id
        self.quantity = quantity
        super().__init__(f"Quantity {quantity} for product {product_id} must be positive.")

    def details(self):
        return {"product_id": self.product_id, "quantity": self.quantity}


class InvalidPaymentMethod(ValidationFailed):
    code = "INVALID_PAYMENT_METHOD"

    def __init__(self, payment_method):
        self.payment_method = payment_method
        super().__init__(f"Unknown payment method {payment_method!r}.")


class InsufficientStock(ValidationFailed):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, product_id, product_name, available=None, requested=None):
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(f"Not enough stock for {product_name} (requested {requested}, available {available}).")

    @property
    def wire_code(self):
        return f"{self.code}_{self.product_id}_{self.product_name}"

    def details(self):
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "available": self.available,
            "requested": self.requested,
        }


class CreditConfigMissing(ValidationFailed):
    code = "CREDIT_CONFIG_MISSING"
    default_message = "Credit sales need installment terms."


class InvalidInstallmentCount(ValidationFailed):
    code = "INVALID_INSTALLMENT_COUNT"

    def __init__(self, installment_count):
        self.installment_count = installment_count
        super().__init__(f"Installment count must be positive, got {installment_count!r}.")


# Not found

class ProductNotFound(NotFound):
    code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product {product_id} does not exist.")

    @property
    def wire_code(self):
        return f"{self.code}_{self.product_id}"

    def details(self):
        return {"product_id": self.product_id}


class CustomerNotFound(NotFound):
    code = "CUSTOMER_NOT_FOUND"

    def __init__(self, customer_id):
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} does not exist.")


class SupplierNotFound(NotFound):
    code = "SUPPLIER_NOT_FOUND"

    def __init__(self, supplier_id):
        self.supplier_id = supplier_id
        super().__init__(f"Supplier {supplier_id} does not exist.")


class OrderNotFound(NotFound):
    code = "ORDER_NOT_FOUND"

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order {order_id} does not exist.")


# Conflict

class OrderAlreadyVoided(Conflict):
    code = "ORDER_ALREADY_VOIDED"

    def __init__(self, number):
        self.number = number
        super().__init__(f"Order {number} is already voided.")


class DuplicateMovement(Conflict):
    code = "DUPLICATE_MOVEMENT"

    def __init__(self, origin, reference_id, product_id):
        self.origin = origin
        self.reference_id = reference_id
        self.product_id = product_id
        super().__init__(
            f"A {origin} movement for product {product_id} on order {reference_id} is already recorded."
        )


class UnsupportedOperation(Conflict):
    code = "UNSUPPORTED_OPERATION"
    default_message = "Unsupported operation."


# Configuration

class VoidedStatusNotConfigured(ConfigurationError):
    code = "VOIDED_STATUS_NOT_CONFIGURED"
    default_message = "Record status 'voided' is missing. Run manage.py seed_reference_data."


class ActiveStatusNotConfigured(ConfigurationError):
    code = "ACTIVE_STATUS_NOT_CONFIGURED"
    default_message = "Record status 'active' is missing. Run manage.py seed_reference_data."


class NumberSeriesNotConfigured(ConfigurationError):
    code = "NUMBER_SERIES_NOT_CONFIGURED"

    def __init__(self, series_code):
        self.series_code = series_code
        super().__init__(f"No number series definition for {series_code!r} in BACKOFFICE_NUMBER_SERIES.")
