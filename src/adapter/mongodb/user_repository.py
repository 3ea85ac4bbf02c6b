"""MongoDB implementation of UserRepository."""

from datetime import date
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import COUNTERS_COLLECTION_NAME, USERS_COLLECTION_NAME
from domain.model.errors import DuplicateEmailError, RepositoryError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    """Users stored one document per user, keyed by an integer ``_id``.

    Ids come from a per-collection sequence in the counters collection.
    The unique index on ``email`` is the uniqueness backstop for
    concurrent registrations.
    """

    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]
        self.counters = db[COUNTERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        birthday = doc.get('birthday')
        return User(
            id=doc['_id'],
            email=doc['email'],
            password_hash=doc['password_hash'],
            first_name=doc['first_name'],
            last_name=doc['last_name'],
            phone=doc.get('phone', ''),
            birthday=date.fromisoformat(birthday) if birthday else None,
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
        )

    def _to_document(self, user: User) -> dict:
        return {
            'email': user.email,
            'password_hash': user.password_hash,
            'first_name': user.first_name,
            'last_name': user.last_name,
            'phone': user.phone,
            'birthday': user.birthday.isoformat() if user.birthday else None,
            'created_at': user.created_at,
            'updated_at': user.updated_at,
        }

    def _next_id(self) -> int:
        counter = self.counters.find_one_and_update(
            {'_id': USERS_COLLECTION_NAME},
            {'$inc': {'seq': 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return counter['seq']

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> int:
        """Insert the user and return its new id."""
        try:
            user_id = self._next_id()
            self.collection.insert_one({'_id': user_id, **self._to_document(user)})
        except DuplicateKeyError as e:
            logger.warning("User creation failed: email already exists", extra={"email": user.email})
            raise DuplicateEmailError(user.email) from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": user.email, "error": str(e)})
            raise RepositoryError("Failed to create user") from e

        logger.info("User created", extra={"userId": user_id, "email": user.email})
        return user_id

    def update(self, user: User) -> bool:
        """Overwrite the stored fields of an existing user."""
        try:
            result = self.collection.update_one(
                {'_id': user.id},
                {'$set': self._to_document(user)},
            )
        except DuplicateKeyError as e:
            logger.warning("User update failed: email already exists", extra={"userId": user.id})
            raise DuplicateEmailError(user.email) from e
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user.id, "error": str(e)})
            raise RepositoryError("Failed to update user") from e

        if result.matched_count == 0:
            logger.debug("Update matched no user", extra={"userId": user.id})
            return False
        return True

    def delete(self, user_id: int) -> bool:
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise RepositoryError("Failed to delete user") from e
        return result.deleted_count > 0

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise RepositoryError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: int) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise RepositoryError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def exists(self, email: str) -> bool:
        try:
            return self.collection.count_documents({'email': email}, limit=1) > 0
        except PyMongoError as e:
            logger.error("Failed to check user existence", extra={"email": email, "error": str(e)})
            raise RepositoryError("Failed to check user") from e
