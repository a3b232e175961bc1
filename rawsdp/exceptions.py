"""SDP-specific exception hierarchy."""

class SDPError(Exception):
    """Base SDP exception."""
    pass

class SDPValidationError(SDPError):
    """Raised when an argument to the public API is invalid."""
    pass

class SDPParseError(SDPError):
    """Raised on the first malformed m=, a=rtpmap, a=fmtp or a=control line."""
    pass
