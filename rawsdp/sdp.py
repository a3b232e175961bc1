"""SDP parser for RTSP DESCRIBE bodies.

Only the lines a media pipeline needs are interpreted:

    m=<media> ...                                        -> MediaDescription.media
    a=rtpmap:<pt> <name>/<rate>[/<params>]               -> RtpMap
    a=fmtp:<format> <name>=<value>[; <name>=<value>]...  -> Fmtp
    a=control:<value>                                    -> Control

Everything else (v=, o=, s=, t=, c=, b=, other a= lines) is ignored. Lines are
delimited by CRLF only.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from .exceptions import SDPParseError, SDPValidationError
from .utils import resolve_control_url

log = logging.getLogger("rawsdp.sdp")

CRLF = "\r\n"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT_MIN, _INT_MAX = -(1 << 63), (1 << 63) - 1

@dataclass(frozen=True)
class RtpMap:
    payload_type: int = 0
    encoding_name: str = ""
    clock_rate: int = 0
    encoding_parameters: str = ""

@dataclass(frozen=True)
class Fmtp:
    format: int
    parameters: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # read-only snapshot of the name -> value pairs
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

@dataclass(frozen=True)
class Control:
    value: str = ""

@dataclass(frozen=True)
class MediaDescription:
    """One m= block and the attributes attached to it."""
    media: str
    rtp_map: RtpMap = field(default_factory=RtpMap)
    fmt_params: Optional[Fmtp] = None
    control: Control = field(default_factory=Control)

    def control_url(self, base_url: str, mode: str = "strict") -> str:
        return resolve_control_url(base_url, self.control.value, mode)

@dataclass(frozen=True)
class SessionDescription:
    media: Tuple[MediaDescription, ...] = ()

    def __len__(self) -> int:
        return len(self.media)

    def __iter__(self) -> Iterator[MediaDescription]:
        return iter(self.media)

    def __getitem__(self, index: int) -> MediaDescription:
        return self.media[index]

    def find(self, media_type: str) -> Optional[MediaDescription]:
        """First description of the given media type ("video", "audio", ...)."""
        for md in self.media:
            if md.media == media_type:
                return md
        return None

@dataclass
class _MediaBuilder:
    # in-progress m= block; attribute lines overwrite by assignment
    media: str
    rtp_map: RtpMap = field(default_factory=RtpMap)
    fmt_params: Optional[Fmtp] = None
    control: Control = field(default_factory=Control)

    def build(self) -> MediaDescription:
        return MediaDescription(self.media, self.rtp_map, self.fmt_params, self.control)

def _atoi(token: str, line: str) -> int:
    if not _INT_RE.fullmatch(token):
        raise SDPParseError(f"Expected integer {token!r} in line: {line!r}")
    value = int(token, 10)
    if not _INT_MIN <= value <= _INT_MAX:
        raise SDPParseError(f"Integer {token!r} out of range in line: {line!r}")
    return value

def _split_value(line: str) -> Tuple[str, str]:
    # "a=<name>:<token> <rest>" -> (token, rest)
    items = line.split(":", 1)
    if len(items) != 2:
        raise SDPParseError(f"Missing ':' in line: {line!r}")
    items = items[1].split(" ", 1)
    if len(items) != 2:
        raise SDPParseError(f"Missing ' ' after ':' in line: {line!r}")
    return items[0], items[1]

def parse_m(line: str) -> str:
    """Return the media type of an m= line; ``m=`` alone gives ``""``."""
    rest = line[2:] if line.startswith("m=") else line
    return rest.split(" ")[0]

def parse_rtpmap(line: str) -> RtpMap:
    token, rest = _split_value(line)
    payload_type = _atoi(token, line)
    items = rest.split("/", 2)
    if len(items) not in (2, 3):
        raise SDPParseError(f"Malformed rtpmap encoding in line: {line!r}")
    encoding_parameters = items[2] if len(items) == 3 else ""
    return RtpMap(payload_type=payload_type,
                  encoding_name=items[0],
                  clock_rate=_atoi(items[1], line),
                  encoding_parameters=encoding_parameters)

def parse_fmtp(line: str) -> Fmtp:
    token, rest = _split_value(line)
    fmt = _atoi(token, line)
    parameters: Dict[str, str] = {}
    for pp in rest.split(";"):
        pp = pp.strip()
        if not pp:
            continue
        kv = pp.split("=", 1)
        if len(kv) != 2:
            raise SDPParseError(f"Malformed fmtp parameter {pp!r} in line: {line!r}")
        parameters[kv[0]] = kv[1]
    return Fmtp(format=fmt, parameters=parameters)

def parse_control(line: str) -> Control:
    prefix = "a=control:"
    if not line.startswith(prefix):
        raise SDPParseError(f"Malformed control line: {line!r}")
    return Control(line[len(prefix):])

_ATTRIBUTES = (
    ("a=rtpmap", "rtp_map", parse_rtpmap),
    ("a=fmtp", "fmt_params", parse_fmtp),
    ("a=control", "control", parse_control),
)

def parse_sdp(text: Union[str, bytes], encoding: str = "utf-8") -> SessionDescription:
    """Parse an SDP body into a SessionDescription.

    Raises:
        SDPParseError on the first malformed recognized line; nothing is returned
        for the lines before it.
        SDPValidationError if text is neither str nor bytes.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode(encoding)
        except LookupError as e:
            raise SDPValidationError(f"Unknown encoding: {encoding!r}") from e
        except UnicodeDecodeError as e:
            raise SDPParseError(f"SDP body is not valid {encoding}") from e
    if not isinstance(text, str):
        raise SDPValidationError("SDP text must be str or bytes")

    media = []
    current: Optional[_MediaBuilder] = None
    for lineno, line in enumerate(text.split(CRLF), 1):
        try:
            if line.startswith("m="):
                kind = parse_m(line)
                if current is not None:
                    media.append(current.build())
                    log.debug("media %r finalized", current.media)
                current = _MediaBuilder(kind)
                continue
            for prefix, slot, parser in _ATTRIBUTES:
                if line.startswith(prefix):
                    value = parser(line)
                    if current is None:
                        log.debug("line %d: %s before first m= line dropped", lineno, prefix)
                    else:
                        setattr(current, slot, value)
                    break
        except SDPParseError:
            log.debug("line %d: malformed SDP line %r", lineno, line)
            raise
    if current is not None:
        media.append(current.build())
        log.debug("media %r finalized", current.media)
    return SessionDescription(tuple(media))
