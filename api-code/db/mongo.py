from __future__ import annotations

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from settings import Settings, get_settings


_client: Optional[AsyncIOMotorClient] = None


def get_mongo_client(settings: Optional[Settings] = None) -> AsyncIOMotorClient:
    global _client
    if _client is None:
        settings = settings or get_settings()
        _client = AsyncIOMotorClient(
            settings.mongodb_uri,
            tz_aware=True,
            serverSelectionTimeoutMS=3000,
        )
    return _client


def get_database(settings: Optional[Settings] = None) -> AsyncIOMotorDatabase:
    settings = settings or get_settings()
    client = get_mongo_client(settings)
    return client[settings.mongodb_db_name]


def close_mongo_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
