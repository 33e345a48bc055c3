"""Port definition for one-time passcode verification."""

from typing import Protocol


class OtpVerifier(Protocol):
    def verify(self, phone_number: str, code: str) -> bool:
        """Consume ``code`` for ``phone_number``. Return True if it was valid."""
        ...
