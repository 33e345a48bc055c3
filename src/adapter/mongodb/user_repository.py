"""MongoDB implementation of UserRepository.

Uniqueness of id, email and phone number is enforced by the collection's
indexes, so racing inserts for the same key cannot both succeed. Every call
runs under ``pymongo.timeout`` and every write is acknowledged by a majority
with journaling.
"""

from logging import getLogger

import pymongo
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from pymongo.write_concern import WriteConcern

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, InfrastructureError, NotFoundError
from domain.model.user import User, check_update_fields

logger = getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0

# Unique lookup keys that are left out of the document when empty, so the
# partial unique indexes only cover users that actually have them.
_OPTIONAL_KEYS = ('email', 'phone_number')


class MongoUserRepository:
    def __init__(self, db: Database, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.collection = db[USERS_COLLECTION_NAME].with_options(
            write_concern=WriteConcern(w='majority', j=True),
        )
        self.timeout = timeout

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            with pymongo.timeout(self.timeout):
                results = [
                    create_index_safe(
                        self.collection, [('email', 1)], 'idx_users_email',
                        unique=True, partialFilterExpression={'email': {'$exists': True}},
                    ),
                    create_index_safe(
                        self.collection, [('phone_number', 1)], 'idx_users_phone_number',
                        unique=True, partialFilterExpression={'phone_number': {'$exists': True}},
                    ),
                    create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at'),
                ]
            return all(results)
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            created_at=doc['created_at'],
            password_hash=doc['password_hash'],
            name=doc.get('name', ''),
            username=doc.get('username', ''),
            email=doc.get('email', ''),
            phone_number=doc.get('phone_number', ''),
            profile_pic=doc.get('profile_pic', ''),
            user_type=doc.get('user_type', ''),
        )

    def _to_document(self, user: User) -> dict:
        doc = {
            '_id': user.id,
            'name': user.name,
            'username': user.username,
            'email': user.email,
            'phone_number': user.phone_number,
            'profile_pic': user.profile_pic,
            'user_type': user.user_type,
            'password_hash': user.password_hash,
            'created_at': user.created_at,
        }
        for key in _OPTIONAL_KEYS:
            if not doc[key]:
                del doc[key]
        return doc

    def _find_one(self, query: dict, what: str) -> User:
        try:
            with pymongo.timeout(self.timeout):
                doc = self.collection.find_one(query)
        except PyMongoError as e:
            logger.error(f"Failed to get user by {what}", extra={"error": str(e)})
            raise InfrastructureError(f"Failed to get user by {what}") from e
        if doc is None:
            raise NotFoundError(f"No user with this {what}")
        return self._to_domain(doc)

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> User:
        """Insert a new user document and return the stored User."""
        doc = self._to_document(user)
        try:
            with pymongo.timeout(self.timeout):
                self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: duplicate key", extra={"userId": user.id})
            raise DuplicateError("User with this id, email or phone already exists") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"userId": user.id, "error": str(e)})
            raise InfrastructureError("Failed to create user") from e

        logger.info("User created", extra={"userId": user.id})
        return self._to_domain(doc)

    def update(self, user_id: str, fields: dict) -> User:
        """Merge the supplied fields into the stored user."""
        check_update_fields(fields)
        if not fields:
            return self.get_by_id(user_id)

        to_set = {k: v for k, v in fields.items() if not (k in _OPTIONAL_KEYS and not v)}
        to_unset = {k: '' for k, v in fields.items() if k in _OPTIONAL_KEYS and not v}
        update = {}
        if to_set:
            update['$set'] = to_set
        if to_unset:
            update['$unset'] = to_unset

        try:
            with pymongo.timeout(self.timeout):
                doc = self.collection.find_one_and_update(
                    {'_id': user_id},
                    update,
                    return_document=ReturnDocument.AFTER,
                )
        except DuplicateKeyError as e:
            logger.warning("User update failed: duplicate key", extra={"userId": user_id})
            raise DuplicateError("Email or phone number already in use") from e
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise InfrastructureError("Failed to update user") from e

        if doc is None:
            raise NotFoundError(f"User {user_id} not found")
        logger.info("User updated", extra={"userId": user_id, "fields": sorted(fields)})
        return self._to_domain(doc)

    def delete(self, user_id: str) -> bool:
        """Delete a user. Return False if it did not exist."""
        try:
            with pymongo.timeout(self.timeout):
                result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise InfrastructureError("Failed to delete user") from e

        if result.deleted_count > 0:
            logger.info("User deleted", extra={"userId": user_id})
            return True
        return False

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, user_id: str) -> User:
        return self._find_one({'_id': user_id}, 'id')

    def get_by_email(self, email: str) -> User:
        if not email:
            raise NotFoundError("No user with this email")
        return self._find_one({'email': email}, 'email')

    def get_by_phone(self, phone_number: str) -> User:
        if not phone_number:
            raise NotFoundError("No user with this phone number")
        return self._find_one({'phone_number': phone_number}, 'phone number')

    def list_all(self) -> list[User]:
        try:
            with pymongo.timeout(self.timeout):
                docs = list(self.collection.find({}).sort('created_at', 1))
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise InfrastructureError("Failed to list users") from e
        return [self._to_domain(doc) for doc in docs]

    def ping(self) -> bool:
        try:
            with pymongo.timeout(self.timeout):
                self.collection.database.client.admin.command('ping')
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed", extra={"error": str(e)[:200]})
            return False
