"""Utilities: logging, control URL resolution.

resolve_control_url turns the opaque value of an a=control line into the
URL a SETUP request is sent to:

    resolve_control_url("rtsp://cam/live", "trackID=1") -> "rtsp://cam/live/trackID=1"
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from .exceptions import SDPValidationError

logger = logging.getLogger("rawsdp")
logger.addHandler(logging.NullHandler())

_RTSP_SCHEMES = ("rtsp", "rtsps")

def _scheme(url: str) -> str:
    return (urlparse(url).scheme or "").lower()

def resolve_control_url(base_url: str, control: str, mode: str = "strict") -> str:
    """Resolve a media control value against the session base URL.

    Returns:
        base_url for aggregate control ("" or "*"), control itself when it is
        already an absolute RTSP URL, otherwise base_url joined with control.
    Raises:
        SDPValidationError on non-string arguments, or on a non-RTSP base URL
        in strict mode.
    """
    if not isinstance(base_url, str):
        raise SDPValidationError("base_url must be a string")
    if not isinstance(control, str):
        raise SDPValidationError("control must be a string")

    if _scheme(base_url) not in _RTSP_SCHEMES:
        if mode == "strict":
            raise SDPValidationError(f"Invalid RTSP base URL: {base_url!r}")
        else:
            logger.warning("lenient: base URL %r is not RTSP - using control %r as is", base_url, control)
            return control

    if _scheme(control) in _RTSP_SCHEMES:
        return control
    if control in ("", "*"):
        return base_url

    return f"{base_url.rstrip('/')}/{control.lstrip('/')}"
