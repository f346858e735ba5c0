"""
Custom exception classes for better error handling.
Each failure domain of the booking flow has its own error type.
"""


class ValidationError(Exception):
    """Raised when user input is empty or invalid where a value is required."""

    pass


class GeocodeError(Exception):
    """Raised when reverse geocoding fails (transport, status or payload)."""

    pass


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class PersistenceError(DatabaseError):
    """Raised when an appointment cannot be stored or read back."""

    pass


class NotificationError(Exception):
    """Raised when the operator notification cannot be dispatched."""

    pass


class TransportError(Exception):
    """Raised when a reply cannot be delivered to the chat platform."""

    pass
