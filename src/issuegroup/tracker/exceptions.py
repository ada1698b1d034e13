"""Custom exceptions for the issue tracker adapter."""


class TrackerError(Exception):
    """Base exception for issue tracker errors."""


class TicketNotFoundError(TrackerError):
    """Ticket with given number does not exist or is not visible."""

    def __init__(self, number: int, scope: str) -> None:
        super().__init__(f"Issue #{number} not found in {scope}")
        self.number = number
        self.scope = scope
