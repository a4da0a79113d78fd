from .client import close_http_client, get_http_client, request_with_retry
from .errors import AfrotechHTTPError, AfrotechHTTPNetworkError, AfrotechHTTPStatusError

__all__ = [
    "close_http_client",
    "get_http_client",
    "request_with_retry",
    "AfrotechHTTPError",
    "AfrotechHTTPNetworkError",
    "AfrotechHTTPStatusError",
]
