"""Reading invitation emails and extracting the one-click Accept link"""
import email.message
import quopri
import re
from email import errors as email_errors
from email.header import decode_header
from email.parser import BytesParser
from pathlib import Path
from typing import Union

from ..errors import NotAnInvitation, ParseError, ReadError, URLNotFound
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

SUBJECT_SUBSTRING = "open for reservation"

# Folded header continuation: line break followed by whitespace
FOLDING_PATTERN = re.compile(r"\r?\n[ \t]+")

# The Accept button wraps the mailer's click-tracking link
URL_PATTERN = re.compile(rb'.*(http://mandrillapp.*)">Accept.*')


def read_message(path: Union[str, Path]) -> email.message.Message:
    """
    Load a mail file as an RFC 5322 message

    Only the header block is parsed; the body is kept exactly as delivered
    so that it can be decoded by ``decode_body``.

    Args:
        path: Path to the mail file

    Returns:
        Parsed message (case-insensitive, multi-valued headers)

    Raises:
        ReadError: If the file cannot be read
        ParseError: If the bytes are not a valid message
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise ReadError(str(e)) from e

    message = BytesParser().parsebytes(raw, headersonly=True)

    for defect in message.defects:
        if isinstance(defect, email_errors.MissingHeaderBodySeparatorDefect):
            raise ParseError(f"mail: malformed header in {Path(path).name}")

    if not message.keys():
        raise ParseError(f"mail: no headers in {Path(path).name}")

    return message


def _decode_header_value(header_value: str) -> str:
    """Decode email header value (handles encoded words)."""
    if not header_value:
        return ""

    try:
        decoded_parts = decode_header(header_value)
    except email_errors.HeaderParseError:
        return header_value

    decoded_string = ""
    for part, encoding in decoded_parts:
        if isinstance(part, bytes):
            try:
                decoded_string += part.decode(encoding or 'utf-8', errors='replace')
            except LookupError:
                decoded_string += part.decode('utf-8', errors='replace')
        else:
            decoded_string += part

    return decoded_string


def get_subject(message: email.message.Message) -> str:
    """Return the unfolded, decoded Subject header, or an empty string when absent"""
    raw = FOLDING_PATTERN.sub(" ", str(message.get("Subject", "")))
    return _decode_header_value(raw)


def is_reservation_open_message(message: email.message.Message) -> bool:
    """Check whether a message is a class reservation invitation"""
    return SUBJECT_SUBSTRING in get_subject(message)


def ensure_invitation(message: email.message.Message):
    """Raise NotAnInvitation for messages that must be skipped"""
    if not is_reservation_open_message(message):
        raise NotAnInvitation()


def decode_body(message: email.message.Message) -> bytes:
    """Decode the raw message body as quoted-printable"""
    payload = message.get_payload()
    if isinstance(payload, str):
        raw = payload.encode('ascii', 'surrogateescape')
    else:
        raw = bytes(payload or b"")
    return quopri.decodestring(raw)


def find_url(message: email.message.Message) -> str:
    """
    Find the acceptance URL in the message body

    Args:
        message: Message returned by ``read_message``

    Returns:
        The click-tracking URL behind the Accept button

    Raises:
        URLNotFound: If the body has no Accept link
    """
    body = decode_body(message)

    match = URL_PATTERN.search(body)
    if match is None:
        raise URLNotFound()

    url = match.group(1).decode('utf-8', errors='replace')
    logger.debug(f"Found acceptance URL: {url}")
    return url
