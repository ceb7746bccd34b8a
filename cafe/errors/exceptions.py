# coding: utf8


class ApiError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message=None, status_code=None, details=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class AuthError(ApiError):
    status_code = 401
    default_message = "Invalid token"


class ValidationError(ApiError):
    status_code = 400
    default_message = "Request parameters are invalid."


class InvalidTransitionError(ValidationError):
    default_message = "Invalid status transition"


class AuthorizationError(ApiError):
    status_code = 403
    default_message = "Not authorized"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"


class PaymentError(ApiError):
    status_code = 400
    default_message = "Payment failed"


class InvalidSignatureError(PaymentError):
    default_message = "Invalid signature."


class PaymentNotCapturedError(PaymentError):
    default_message = "Payment not captured"


class GatewayError(PaymentError):
    status_code = 502
    default_message = "Payment gateway error"


class AlreadyFinalizedError(ApiError):
    status_code = 400
    default_message = "Order is already finalized."


class StockError(ApiError):
    status_code = 400
    default_message = "Items sold out"
