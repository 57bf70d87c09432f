"""REST runtime abstractions."""

from .envelope import decode_envelope, unwrap
from .runner import ModelAdapter, ResponseAdapter, RestEndpointSpec, RestRunner
from .transport import RESTTransport

__all__ = [
    "RESTTransport",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
    "ModelAdapter",
    "decode_envelope",
    "unwrap",
]
