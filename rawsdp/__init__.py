"""rawsdp - SDP parser for RTSP/RTP media pipelines

Public API:
  - parse_sdp: SDP body -> SessionDescription
  - parse_m, parse_rtpmap, parse_fmtp, parse_control: single-line parsers
  - resolve_control_url: utility for SETUP URLs
"""

from .sdp import (
    SessionDescription,
    MediaDescription,
    RtpMap,
    Fmtp,
    Control,
    parse_sdp,
    parse_m,
    parse_rtpmap,
    parse_fmtp,
    parse_control,
)
from .utils import resolve_control_url
from .exceptions import *

__version__ = "0.1.0"

__all__ = [
    "SessionDescription",
    "MediaDescription",
    "RtpMap",
    "Fmtp",
    "Control",
    "parse_sdp",
    "parse_m",
    "parse_rtpmap",
    "parse_fmtp",
    "parse_control",
    "resolve_control_url",
    # exceptions
    "SDPError", "SDPValidationError", "SDPParseError"
]
