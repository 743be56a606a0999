class BookingError(Exception):
    """Base class for booking engine errors."""
    pass


class ValidationError(BookingError):
    """Raised when a draft fails validation. Carries the first failing reason."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class NotFoundError(BookingError):
    """Raised when an operation references a booking id absent from the store."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(f"Booking not found: {booking_id}")
        self.booking_id = booking_id


class PersistenceError(BookingError):
    """Raised when the underlying store cannot be read or written."""
    pass


class StoreRecoveryWarning(UserWarning):
    """Stored bookings were unreadable and an empty collection was used instead."""
    pass
