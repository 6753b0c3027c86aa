GENERIC_FAILURE_MESSAGE = (
    "Intelligence gathering failed. The hotel listing might be highly "
    "inconsistent across platforms. Please try again."
)


class GeminiError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class RateLimitError(Exception):
    def __init__(self, service: str):
        self.service = service
        super().__init__(f"Rate limit exceeded for {service}")


class MalformedPayloadError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class IntelligenceGatheringError(Exception):
    """Single user-facing failure for a report fetch, whatever the cause."""

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE):
        self.message = message
        super().__init__(message)
