class RelayError(Exception):
    """Base class for failures that abort a relay request.

    Each subclass carries the HTTP status and the machine-readable code
    reported to the caller.
    """

    status_code: int = 502
    code: str = "relay_error"


class UpstreamError(RelayError):
    """Exception for upstream fetch failures."""

    code = "upstream_error"


class UpstreamTransportError(UpstreamError):
    """Request could not be built or the network call failed."""

    code = "upstream_unavailable"


class UpstreamTimeoutError(UpstreamError):
    status_code = 504
    code = "upstream_timeout"


class UpstreamStatusError(UpstreamError):
    """Upstream answered with a non-2xx status."""

    code = "upstream_status"

    def __init__(self, message: str, upstream_status: int):
        super().__init__(message)
        self.upstream_status = upstream_status


class DecompressionError(UpstreamError):
    code = "decompression_error"


class SchemaError(RelayError):
    """Upstream body is not JSON, or not shaped like a box score summary."""

    code = "schema_error"


class ParseError(RelayError):
    """The game date cell is missing, not text, or not in the expected format."""

    code = "parse_error"


class ConfigurationError(Exception):
    """Column table is inconsistent with the expected upstream row layout."""

    pass
