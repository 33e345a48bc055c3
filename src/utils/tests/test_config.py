"""Tests for Settings.from_env()."""

import os
import unittest
from unittest.mock import patch

from domain.model.errors import ConfigurationError, ErrorKind
from utils.config import DEFAULT_DATABASE_NAME, Settings


@patch('utils.config.load_dotenv', lambda: None)
class TestSettingsFromEnv(unittest.TestCase):

    def test_missing_secret_fails_fast(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigurationError) as ctx:
                Settings.from_env()
        self.assertEqual(ctx.exception.kind, ErrorKind.CONFIGURATION)

    def test_empty_secret_fails_fast(self):
        with patch.dict(os.environ, {'JWT_SECRET': ''}, clear=True):
            with self.assertRaises(ConfigurationError):
                Settings.from_env()

    def test_defaults(self):
        with patch.dict(os.environ, {'JWT_SECRET': 's3cret'}, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.jwt_secret, 's3cret')
        self.assertEqual(settings.database_name, DEFAULT_DATABASE_NAME)
        self.assertEqual(settings.token_expiry_hours, 72)
        self.assertEqual(settings.bcrypt_rounds, 12)
        self.assertEqual(settings.mongo_timeout_seconds, 5.0)
        self.assertEqual(settings.mongo_url, '')

    def test_reads_overrides(self):
        env = {
            'JWT_SECRET': 's3cret',
            'MONGO_URL': 'mongodb://db:27017',
            'MONGODB_DATABASE': 'accounts',
            'MONGO_TIMEOUT_SECONDS': '2.5',
            'BCRYPT_ROUNDS': '10',
            'TOKEN_EXPIRY_HOURS': '24',
            'REDIS_URL': 'redis://cache:6379/0',
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        self.assertEqual(settings.mongo_url, 'mongodb://db:27017')
        self.assertEqual(settings.database_name, 'accounts')
        self.assertEqual(settings.mongo_timeout_seconds, 2.5)
        self.assertEqual(settings.bcrypt_rounds, 10)
        self.assertEqual(settings.token_expiry_hours, 24)
        self.assertEqual(settings.redis_url, 'redis://cache:6379/0')

    def test_malformed_number_is_configuration_error(self):
        with patch.dict(os.environ, {'JWT_SECRET': 's3cret', 'BCRYPT_ROUNDS': 'twelve'}, clear=True):
            with self.assertRaises(ConfigurationError):
                Settings.from_env()

    def test_repr_hides_secrets(self):
        settings = Settings(
            jwt_secret='s3cret',
            mongo_url='mongodb://user:pw@db',
            redis_url='redis://:pw@cache',
        )
        self.assertNotIn('s3cret', repr(settings))
        self.assertNotIn('pw', repr(settings))


if __name__ == '__main__':
    unittest.main()
