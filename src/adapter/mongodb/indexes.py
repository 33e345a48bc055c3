"""MongoDB index management.

Uniqueness of email and phone number rests on these indexes, so startup
replaces any existing index whose keys or options disagree with the
wanted definition instead of silently keeping it.
"""

from logging import getLogger

from pymongo.collection import Collection
from pymongo.errors import OperationFailure

logger = getLogger(__name__)

# Index options that change what an index enforces
_ENFORCING_OPTIONS = ('unique', 'partialFilterExpression', 'sparse')


def _matches(info: dict, keys: list, options: dict) -> bool:
    if list(info.get('key', [])) != list(keys):
        return False
    return all(info.get(opt) == options.get(opt) for opt in _ENFORCING_OPTIONS)


def create_index_safe(collection: Collection, keys: list, name: str, **options) -> bool:
    """Create an index, replacing a stale one with the same name or keys.

    Returns True if the wanted index exists afterwards.
    """
    existing = collection.index_information()
    current = existing.get(name)
    if current is not None and _matches(current, keys, options):
        return True

    for idx_name, info in existing.items():
        if idx_name == '_id_':
            continue
        if idx_name == name or list(info.get('key', [])) == list(keys):
            logger.warning("Dropping stale index", extra={"index": idx_name})
            collection.drop_index(idx_name)

    try:
        collection.create_index(keys, name=name, **options)
    except OperationFailure as e:
        # Existing documents already violate the unique constraint
        logger.error("Failed to create index", extra={"index": name, "error": str(e)[:200]})
        return False

    logger.info("Created index", extra={"index": name})
    return True


def ensure_all_indexes(db, timeout: float = 5.0) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db, timeout=timeout).ensure_indexes()
