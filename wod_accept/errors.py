"""Exceptions raised while handling an invitation"""
from typing import Optional


class ReservationError(Exception):
    """Base class for every failure inside the per-file pipeline.
    
    ``str(error)`` is the text pushed to the operator. Errors raised once the
    acceptance URL is known carry it in ``url`` so it can be retried by hand.
    """
    
    default_message = "Reservation failed"
    
    def __init__(self, message: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.url = url
    
    def notification_text(self) -> str:
        if self.url:
            return f"{self}\n{self.url}"
        return str(self)


class ReadError(ReservationError):
    """Mail file could not be read"""


class ParseError(ReservationError):
    """Mail file is not an RFC 5322 message"""


class NotAnInvitation(ReservationError):
    """Message subject is not an invitation; skipped, not a failure"""
    
    default_message = "Not an 'open for reservation' message"


class URLNotFound(ReservationError):
    default_message = "URL not found"


class FetchError(ReservationError):
    """Transport error while requesting the acceptance URL"""


class StatusMissing(ReservationError):
    default_message = "Class status node not found"


class DetailsMissing(ReservationError):
    default_message = "Class details node not found"


class DetailsUnparsed(ReservationError):
    default_message = "Class details not found"


class TimeUnparsed(ReservationError):
    """Class date and time did not form a valid timestamp"""


class NotifierError(ReservationError):
    """Push provider rejected a message"""
