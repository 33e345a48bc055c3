"""Unit tests for SessionIssuer."""

import unittest
from datetime import datetime, timedelta, timezone

from jose import jwt

from domain.model.errors import ConfigurationError, InvalidCredentialsError
from services.session_service import JWT_ALGORITHM, TOKEN_EXPIRY, SessionIssuer

SECRET = 'test-secret-0123456789abcdef0123456789abcdef'


class TestSessionIssuer(unittest.TestCase):

    def setUp(self):
        self.now = datetime.now(timezone.utc).replace(microsecond=0)
        self.issuer = SessionIssuer(SECRET, clock=lambda: self.now)

    def test_empty_secret_is_rejected(self):
        with self.assertRaises(ConfigurationError):
            SessionIssuer('')

    def test_default_expiry_is_72_hours(self):
        self.assertEqual(TOKEN_EXPIRY, timedelta(hours=72))

    def test_issue_encodes_subject_email_and_expiry(self):
        token = self.issuer.issue('user-1', 'asha@example.com')

        claims = jwt.decode(token, SECRET, algorithms=[JWT_ALGORITHM])
        self.assertEqual(claims['sub'], 'user-1')
        self.assertEqual(claims['email'], 'asha@example.com')
        self.assertEqual(claims['iat'], int(self.now.timestamp()))
        self.assertEqual(claims['exp'], int((self.now + timedelta(hours=72)).timestamp()))

    def test_token_does_not_contain_secret(self):
        token = self.issuer.issue('user-1', 'asha@example.com')
        self.assertNotIn(SECRET, token)
        self.assertNotIn(SECRET, repr(self.issuer))

    def test_custom_expiry(self):
        token = self.issuer.issue('user-1', 'a@example.com', expires_in=timedelta(minutes=5))
        claims = jwt.decode(token, SECRET, algorithms=[JWT_ALGORITHM])
        self.assertEqual(claims['exp'] - claims['iat'], 300)

    def test_decode_round_trip(self):
        token = self.issuer.issue('user-1', 'asha@example.com')
        self.assertEqual(self.issuer.decode(token)['sub'], 'user-1')

    def test_decode_rejects_wrong_secret(self):
        other = SessionIssuer('another-secret', clock=lambda: self.now)
        token = other.issue('user-1', 'asha@example.com')

        with self.assertRaises(InvalidCredentialsError):
            self.issuer.decode(token)

    def test_decode_rejects_garbage(self):
        with self.assertRaises(InvalidCredentialsError):
            self.issuer.decode('not.a.token')

    def test_decode_rejects_expired_token(self):
        token = self.issuer.issue('user-1', 'asha@example.com')
        later = SessionIssuer(SECRET, clock=lambda: self.now + timedelta(hours=72, seconds=1))

        with self.assertRaises(InvalidCredentialsError):
            later.decode(token)


if __name__ == '__main__':
    unittest.main()
