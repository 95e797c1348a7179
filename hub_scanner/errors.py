"""Error categories surfaced by the scanner core.

Leaf I/O failures are wrapped with the URL or resource they concern, then
raised as one of the classes below. Callers branch on ``category`` rather
than on message text.
"""


class HubScannerError(Exception):
    category = "internal"

    def __init__(self, message, **context):
        super().__init__(message)
        self.context = context


class ValidationError(HubScannerError):
    category = "invalid_input"


class TransportError(HubScannerError):
    category = "transport"


class RateLimitExhaustedError(HubScannerError):
    category = "rate_limited"


class HubAPIError(HubScannerError):
    category = "upstream"

    def __init__(self, status, body="", url=""):
        snippet = (body or "")[:200]
        super().__init__(f"Hub request failed with status {status}: {snippet}", url=url)
        self.status = status
        self.body = snippet


class NotFoundError(HubScannerError):
    category = "not_found"


class ParseError(HubScannerError):
    category = "parse"


class StorageError(HubScannerError):
    category = "storage"


class CancelledError(HubScannerError):
    category = "cancelled"


EXIT_CODES = {
    "invalid_input": 2,
    "not_found": 4,
    "cancelled": 130,
}


def exit_code_for(error):
    return EXIT_CODES.get(getattr(error, "category", None), 1)
