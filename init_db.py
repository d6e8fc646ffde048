"""Initialize database tables"""
import asyncio

from catalog_api.config import get_settings
from catalog_api.database import Database
from catalog_api.models import *  # noqa: F401,F403 - Import all models to register them


async def init():
    database = Database.from_settings(get_settings())
    try:
        await database.connect()
        await database.create_all()
    finally:
        await database.close()
    print("Database tables created successfully.")


if __name__ == "__main__":
    asyncio.run(init())
