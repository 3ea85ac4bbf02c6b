import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Suppress verbose PyMongo logs
# Set pymongo logger to WARNING to reduce noise from driver-level logs
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)


def create_mongodb_client(url: str) -> MongoClient:
    """Build a MongoDB client without touching the network.

    MongoClient connects lazily, so the app can start while the database is
    down; individual operations then fail with PyMongoError, which the
    repositories turn into RepositoryError.
    """
    return MongoClient(
        url,
        serverSelectionTimeoutMS=5000,  # 5s timeout for server selection
        connectTimeoutMS=5000,  # 5s timeout for initial connection
        socketTimeoutMS=30000,  # 30s timeout for operations
        maxPoolSize=10,
        minPoolSize=0,   # Don't maintain idle connections
        maxIdleTimeMS=30000,  # Close idle connections after 30s
        waitQueueTimeoutMS=10000,  # Wait up to 10s for available connection
        retryWrites=True,
        retryReads=True,
        tz_aware=True,  # timestamps come back as UTC-aware datetimes
    )


def ping(client: MongoClient) -> bool:
    """Return True if the server answers a ping."""
    try:
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning(f"[MONGODB] Ping failed: {str(e)[:200]}")
        return False
