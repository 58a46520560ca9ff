"""Error kinds raised while relaying a prompt, with the HTTP status each maps to."""

from typing import Any


class RelayError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message}


class PromptMissingError(RelayError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("No prompt provided.")


class ApiKeyMissingError(RelayError):
    status_code = 500

    def __init__(self) -> None:
        super().__init__("API key is missing.")


class UpstreamError(RelayError):
    """The provider answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Google API returned {status_code}")
        self.status_code = status_code
        self.body = body

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.body}


class TransportError(RelayError):
    """The outbound call failed before a response arrived."""


class UpstreamParseError(RelayError):
    """The provider answered 2xx with a body that is not JSON."""
