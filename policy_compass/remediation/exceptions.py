class TicketCreationError(Exception):
    """Raised when the issue tracker rejects or fails a single ticket.

    Never escapes the dispatcher; it is captured into a TicketError outcome.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TicketValidationError(TicketCreationError):
    """Raised when an item cannot be turned into a ticket payload."""
