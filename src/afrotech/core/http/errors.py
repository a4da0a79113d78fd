from __future__ import annotations


class AfrotechHTTPError(RuntimeError):
    """Base error for calls made through the shared HTTP client.

    ``url`` is the target as it may be logged: ``[redacted-url]`` when the
    caller asked for redaction.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url

    @property
    def status_code(self) -> int | None:
        return None


class AfrotechHTTPStatusError(AfrotechHTTPError):
    def __init__(self, message: str, status_code: int | None = None, url: str | None = None) -> None:
        super().__init__(message, url=url)
        self._status_code = status_code

    @property
    def status_code(self) -> int | None:
        return self._status_code


class AfrotechHTTPNetworkError(AfrotechHTTPError):
    """Transport failure: connection, timeout or protocol error, after any retries."""
