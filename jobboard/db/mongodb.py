"""
MongoDB Connection Handle

MongoDB stores:
- users: registered job seekers and employers
- jobs: job postings
- applications: job applications with resume references

The connection is an explicit object owned by the FastAPI app (created in
create_app, opened/closed by the lifespan) and handed to the services through
dependencies. Nothing here is module-level state.
"""
import logging
from typing import Optional

from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from jobboard.core.config import Settings

logger = logging.getLogger(__name__)


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "jobs": "jobs",
    "applications": "applications",
}


class MongoConnection:
    """
    Owns one MongoClient and the job-board database.

    Usage:
        mongo = MongoConnection(settings)
        mongo.connect()
        mongo.collection("jobs").find(...)
        mongo.close()

    A pre-built client (e.g. mongomock in tests) can be passed in; it is then
    used as-is and not closed by close().
    """

    def __init__(self, settings: Settings, client: Optional[MongoClient] = None):
        self.settings = settings
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            # pymongo connects lazily, so this never blocks
            self._client = MongoClient(
                self.settings.mongodb_uri,
                connectTimeoutMS=self.settings.mongodb_connect_timeout_ms,
                socketTimeoutMS=self.settings.mongodb_socket_timeout_ms,
                serverSelectionTimeoutMS=self.settings.mongodb_connect_timeout_ms,
            )
        return self._client

    @property
    def db(self) -> Database:
        return self.client[self.settings.mongodb_db]

    def collection(self, name: str) -> Collection:
        return self.db[COLLECTIONS[name]]

    def connect(self) -> bool:
        """
        Verify the server is reachable and create indexes.

        Returns False (after logging) instead of raising: the API keeps
        serving and persistence-backed requests fail one by one.
        """
        try:
            self.client.admin.command("ping")
            self.init_indexes()
        except PyMongoError as e:
            logger.error("MongoDB connection failed: %s", e)
            return False
        logger.info("Database connected successfully (%s)", self.settings.mongodb_db)
        return True

    def init_indexes(self) -> None:
        """Create indexes for uniqueness and the lookups the routes make."""
        self.collection("users").create_index("email", unique=True)
        self.collection("jobs").create_index([("expired", ASCENDING)])
        self.collection("jobs").create_index([("postedBy", ASCENDING)])
        self.collection("applications").create_index([("applicantID.user", ASCENDING)])
        self.collection("applications").create_index([("employerID.user", ASCENDING)])

    def ping(self) -> bool:
        """Return True if MongoDB answers a ping, False otherwise."""
        try:
            self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", e)
            return False

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None
            logger.info("MongoDB connection closed")


def get_mongo(request: Request) -> MongoConnection:
    """FastAPI dependency - the connection created by create_app()."""
    return request.app.state.mongo
