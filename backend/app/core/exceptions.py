"""Typed failures raised by the dispatch core.

Services raise these instead of HTTPException so the core stays usable
outside a request. The API layer maps every DeliveryError to a JSON body
``{"detail": ...}`` with the class status code.
"""


class DeliveryError(Exception):
    """Base class for all dispatch failures."""

    status_code = 500

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class ValidationFailure(DeliveryError):
    """Raised when required input is missing or malformed."""

    status_code = 400


class AuthFailure(DeliveryError):
    """Raised when a runner code cannot be resolved."""

    status_code = 401


class ForbiddenFailure(DeliveryError):
    """Raised when a runner acts on an order assigned to someone else."""

    status_code = 403


class NotFoundFailure(DeliveryError):
    """Raised for unknown order, runner or batch ids."""

    status_code = 404


class ConflictFailure(DeliveryError):
    """Raised when a state change races another one and loses."""

    status_code = 409


class InvalidTransition(ConflictFailure):
    """Raised when an order status would move backwards or skip a step."""

    def __init__(self, order_id: str, current: str, requested: str):
        self.order_id = order_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Order {order_id} cannot move from '{current}' to '{requested}'"
        )
