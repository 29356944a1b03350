from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError
from loguru import logger

from trainboard.config import Settings
from trainboard.exceptions import DatabaseConnectionError


class TrainboardMongoClient:
    def __init__(self, uri: str, db_name: str = "trainboard", timeout_ms: int = 3000):
        self._client = None
        self.uri = uri
        self.db_name = db_name
        self.timeout_ms = timeout_ms
        self.database = None

    def connect(self) -> Database:
        logger.debug("  › [DB] Connecting to MongoDB...")
        self._client = MongoClient(
            self.uri,
            serverSelectionTimeoutMS=self.timeout_ms,
            socketTimeoutMS=self.timeout_ms,
            tz_aware=True,
        )
        self.database = self._client.get_default_database(default=self.db_name)
        logger.debug(f"  ✔ [DB] MongoDB client created for database '{self.database.name}'")
        return self.database

    def ping(self) -> None:
        self._client.admin.command("ping")

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.debug("  • [DB] MongoDB connection closed")
        self._client = None
        self.database = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def open_database(settings: Settings) -> TrainboardMongoClient:
    """
    Connect once at startup.

    A malformed connection string always raises. An unreachable server raises
    ``DatabaseConnectionError`` when ``db_fail_fast`` is set; otherwise it is
    logged and the client is returned so that later queries surface the error.
    """
    client = TrainboardMongoClient(settings.db, settings.db_name, settings.db_timeout_ms)
    try:
        client.connect()
    except PyMongoError as e:
        raise DatabaseConnectionError(f"Invalid MongoDB configuration: {e}") from e

    try:
        client.ping()
    except PyMongoError as e:
        if settings.db_fail_fast:
            client.close()
            logger.error(f"✖ [DB] MongoDB is unreachable: {e}")
            raise DatabaseConnectionError(
                "Could not connect to MongoDB",
                details={"database": settings.db_name},
            ) from e
        logger.warning(f"⚠ [DB] MongoDB is unreachable, continuing without a verified connection: {e}")
        return client

    logger.info(f"✔ [DB] Connected to MongoDB database '{client.database.name}'")
    return client
