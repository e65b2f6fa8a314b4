"""
ADB host request codec.

Requests are ASCII service names prefixed by their length as four
uppercase hex digits. The daemon answers each request with a 4-byte
status word, ``OKAY`` or ``FAIL``.
"""

import logging

from adb_projector.core.protocol import (
    REQUEST_LENGTH_DIGITS,
    REQUEST_MAX_LENGTH,
    STATUS_LENGTH,
    STATUS_OKAY,
)
from adb_projector.core.socket import ADBSocket

logger = logging.getLogger(__name__)


def encode_request(service: str) -> bytes:
    """
    Encode a service request for the wire.

    Args:
        service: Service name, e.g. ``"framebuffer:"``

    Returns:
        Length-prefixed ASCII request, e.g. ``b"000Cframebuffer:"``

    Raises:
        ValueError: If the name does not fit a 4 hex digit length
    """
    if len(service) > REQUEST_MAX_LENGTH:
        raise ValueError(
            f"Service name too long: {len(service)} > {REQUEST_MAX_LENGTH}"
        )
    return f"{len(service):0{REQUEST_LENGTH_DIGITS}X}{service}".encode("ascii")


def is_okay(status: bytes, strict: bool = False) -> bool:
    """
    Decode a 4-byte status word.

    Only the first and last byte are compared unless ``strict`` is set,
    matching what older clients accepted.
    """
    if len(status) != STATUS_LENGTH:
        return False
    if strict:
        return status == STATUS_OKAY
    return status[0] == STATUS_OKAY[0] and status[3] == STATUS_OKAY[3]


def send_request(sock: ADBSocket, service: str) -> None:
    """Encode ``service`` and write it to the daemon."""
    request = encode_request(service)
    logger.debug(f"<< {request!r}")
    sock.write_all(request)


def check_response(sock: ADBSocket, strict: bool = False) -> bool:
    """
    Read a status word and report whether the request was accepted.

    A rejection is not an error; the caller decides how to abort.

    Args:
        sock: Connected daemon socket
        strict: Require exactly ``OKAY``

    Returns:
        True if the daemon accepted the last request
    """
    status = sock.read_all(STATUS_LENGTH)
    logger.debug(f">> {status!r}")
    return is_okay(status, strict)
