from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from .settings import settings
from catalog_admin.utils.logger import Logger

logger = Logger("database")

# collection → index specs created on connect
INDEXES: dict[str, list[tuple[list[tuple[str, int]], dict]]] = {
    "users": [([("email", ASCENDING)], {"unique": True})],
    "products": [
        ([("category_id", ASCENDING)], {}),
        ([("created_at", DESCENDING)], {}),
    ],
    "app_users": [([("is_authenticated", ASCENDING), ("created_at", DESCENDING)], {})],
    "inquiries": [([("status", ASCENDING), ("created_at", DESCENDING)], {})],
    "notifications": [([("time", DESCENDING)], {})],
    "whats_new": [([("time", DESCENDING)], {})],
    "logs": [
        ([("timestamp", DESCENDING)], {}),
        ([("uid", ASCENDING), ("timestamp", DESCENDING)], {}),
    ],
}


class DatabaseManager:
    """Process-wide MongoDB connection for the dashboard API."""

    _instance = None
    _client: AsyncIOMotorClient | None = None
    _database: AsyncIOMotorDatabase | None = None
    _connected: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    async def connect(self) -> None:
        if self._connected:
            return
        if not settings.mongodb_uri:
            raise RuntimeError("MONGODB_URI is not configured")
        try:
            self._client = AsyncIOMotorClient(settings.mongodb_uri)
            self._database = self._client[settings.database_name]
            await self._client.admin.command("ping")
            self._connected = True
            logger.info(f"Connected to MongoDB [{settings.database_name}]")
        except Exception as e:
            self._connected = False
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

        await self.ensure_indexes()

    async def ensure_indexes(self) -> None:
        """Idempotent; existing indexes with the same spec are left alone."""
        for collection, specs in INDEXES.items():
            for keys, options in specs:
                await self.database[collection].create_index(keys, **options)
        logger.debug(f"Indexes ensured on {len(INDEXES)} collections")

    def close(self) -> None:
        if self._client:
            self._client.close()
            self._connected = False
            self._client = None
            self._database = None
            logger.info("MongoDB connection closed")

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if self._database is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._database

    @property
    def is_connected(self) -> bool:
        return self._connected


db_manager = DatabaseManager()


async def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency: the connected database, connecting on first use."""
    if not db_manager.is_connected:
        await db_manager.connect()
    return db_manager.database
