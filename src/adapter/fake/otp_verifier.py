"""In-memory implementation of OtpVerifier for testing."""


class FakeOtpVerifier:
    def __init__(self):
        self.codes: dict[str, str] = {}

    def issue(self, phone_number: str, code: str) -> None:
        self.codes[phone_number] = code

    def verify(self, phone_number: str, code: str) -> bool:
        if self.codes.get(phone_number) != code:
            return False
        del self.codes[phone_number]
        return True
