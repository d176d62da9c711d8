"""Exceptions raised by the agent core."""


class GoslingError(Exception):
    """Base exception for the agent core.

    Carries a ``details`` dict so callers can log what went wrong without
    parsing the message.
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}


class PacketError(GoslingError):
    """Raised when a GameTickPacket is missing data the agent relies on."""

    def __init__(self, message: str, index: int = None, num_cars: int = None):
        details = {"index": index, "num_cars": num_cars}
        super().__init__(message, details)


class StackError(GoslingError):
    """Base exception for routine stack faults."""


class EmptyStackError(StackError, IndexError):
    """Raised when popping or peeking an empty routine stack."""

    def __init__(self, operation: str = "pop"):
        super().__init__(f"cannot {operation} from an empty routine stack", {"operation": operation})


class StackOwnershipError(StackError):
    """Raised when a running routine tries to pop something other than itself."""

    def __init__(self, running: str, top: str):
        message = f"{running} may only pop itself, but {top} is on top of the stack"
        super().__init__(message, {"running": running, "top": top})
