"""Unit tests for user_service module."""

import unittest
from datetime import datetime, timezone
from functools import partial

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import NotFoundError, ValidationError
from domain.model.user import User
from services.credential_service import hash_password, verify_password
from services.user_service import delete_user, get_user, list_users, update_user

fast_hash = partial(hash_password, rounds=4)


class TestUserService(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.original = self.repo.create(User(
            id='user-1',
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            password_hash=fast_hash('Sup3rSecret'),
            name='Asha',
            username='asha',
            email='asha@example.com',
            phone_number='+911234567890',
            user_type='patient',
        ))

    def test_get_and_list(self):
        self.assertEqual(get_user(self.repo, 'user-1'), self.original)
        self.assertEqual([u.id for u in list_users(self.repo)], ['user-1'])

    def test_partial_update_leaves_other_fields(self):
        updated = update_user(self.repo, 'user-1', {'username': 'asha_r'}, hasher=fast_hash)

        self.assertEqual(updated.username, 'asha_r')
        self.assertEqual(updated.name, self.original.name)
        self.assertEqual(updated.email, self.original.email)
        self.assertEqual(updated.password_hash, self.original.password_hash)
        self.assertEqual(updated.created_at, self.original.created_at)

    def test_password_update_is_hashed(self):
        updated = update_user(self.repo, 'user-1', {'password': 'N3wSecret!'}, hasher=fast_hash)

        self.assertNotEqual(updated.password_hash, 'N3wSecret!')
        self.assertTrue(verify_password('N3wSecret!', updated.password_hash))
        self.assertFalse(verify_password('Sup3rSecret', updated.password_hash))

    def test_empty_password_rejected(self):
        with self.assertRaises(ValidationError):
            update_user(self.repo, 'user-1', {'password': ''}, hasher=fast_hash)

    def test_password_hash_cannot_be_set_directly(self):
        with self.assertRaises(ValidationError):
            update_user(self.repo, 'user-1', {'password_hash': 'plain'}, hasher=fast_hash)

    def test_unknown_field_rejected(self):
        with self.assertRaises(ValidationError):
            update_user(self.repo, 'user-1', {'is_admin': True}, hasher=fast_hash)

    def test_update_missing_user(self):
        with self.assertRaises(NotFoundError):
            update_user(self.repo, 'missing', {'name': 'x'}, hasher=fast_hash)

    def test_input_mapping_not_mutated(self):
        fields = {'password': 'N3wSecret!', 'name': 'A'}
        update_user(self.repo, 'user-1', fields, hasher=fast_hash)
        self.assertEqual(fields, {'password': 'N3wSecret!', 'name': 'A'})

    def test_delete(self):
        self.assertTrue(delete_user(self.repo, 'user-1'))
        self.assertFalse(delete_user(self.repo, 'user-1'))
        with self.assertRaises(NotFoundError):
            get_user(self.repo, 'user-1')


if __name__ == '__main__':
    unittest.main()
