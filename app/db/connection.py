import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, Dict, Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.core.config import AppConfig
from app.core.errors import DatabaseConnectionError


logger = logging.getLogger(__name__)


class MongoConnectionManager:
    """
    Owns the single MongoClient of the process.

    The first caller of get_connection() starts the connection attempt and
    publishes it as an in-flight future; callers arriving meanwhile wait on
    that same future instead of opening their own client. A successful client
    is kept until close(). A failed attempt is cleared so the next call retries.
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        client_factory: Callable[..., Any] = MongoClient,
        client_options: Optional[Dict[str, Any]] = None,
        initializer: Optional[Callable[[Database], None]] = None,
        transactions: bool = False,
    ):
        self.uri = uri
        self.db_name = db_name
        self.transactions = transactions
        self._client_factory = client_factory
        self._client_options = client_options or {}
        self._initializer = initializer
        self._lock = threading.Lock()
        self._client: Optional[Any] = None
        self._pending: Optional[Future] = None
        self._generation = 0

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs) -> "MongoConnectionManager":
        options = {"serverSelectionTimeoutMS": config.mongodb_timeout_ms, "tz_aware": True}
        options.update(kwargs.pop("client_options", {}))
        return cls(
            config.mongodb_uri,
            config.mongodb_db,
            client_options=options,
            transactions=config.mongodb_transactions,
            **kwargs,
        )

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def get_connection(self):
        """
        Return a connected client, connecting on first use.

        Raises:
            DatabaseConnectionError: If the store cannot be reached or the
                manager was closed while the attempt was in flight
        """
        client = self._client
        if client is not None:
            return client

        with self._lock:
            if self._client is not None:
                return self._client
            pending = self._pending
            owner = pending is None
            if owner:
                pending = Future()
                self._pending = pending
            generation = self._generation

        if not owner:
            return pending.result()

        try:
            client = self._connect()
        except BaseException as exc:
            self._clear_pending(pending)
            pending.set_exception(exc)
            raise

        with self._lock:
            closed = generation != self._generation
            if not closed:
                self._client = client
            if self._pending is pending:
                self._pending = None

        if closed:
            client.close()
            exc = DatabaseConnectionError("Connection manager was closed while connecting")
            pending.set_exception(exc)
            raise exc

        pending.set_result(client)
        return client

    def _clear_pending(self, pending: Future) -> None:
        with self._lock:
            if self._pending is pending:
                self._pending = None

    def get_database(self) -> Database:
        return self.get_connection()[self.db_name]

    def _connect(self):
        logger.info(f"Connecting to MongoDB database '{self.db_name}'")
        client = None
        try:
            client = self._client_factory(self.uri, **self._client_options)
            client.admin.command("ping")
            if self._initializer is not None:
                self._initializer(client[self.db_name])
        except PyMongoError as exc:
            if client is not None:
                client.close()
            logger.error(f"MongoDB connection failed: {exc}")
            raise DatabaseConnectionError(f"Could not connect to MongoDB: {exc}") from exc
        logger.info("MongoDB connection established")
        return client

    def ping(self) -> bool:
        """Check the store is reachable, connecting if needed."""
        try:
            self.get_connection().admin.command("ping")
            return True
        except (DatabaseConnectionError, PyMongoError) as exc:
            logger.warning(f"MongoDB ping failed: {exc}")
            return False

    def close(self) -> None:
        with self._lock:
            client = self._client
            self._client = None
            self._pending = None
            self._generation += 1
        if client is not None:
            client.close()
            logger.info("MongoDB connection closed")
