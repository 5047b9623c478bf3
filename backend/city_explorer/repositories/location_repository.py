import logging
from typing import Optional
from databases import Database
from sqlalchemy import Table, MetaData, Column, Float, Text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.schema import CreateTable

from ..errors import StoreFailure
from ..models.schemas import LocationRecord

logger = logging.getLogger(__name__)

class LocationRepository:
    def __init__(self, database_url: str):
        self.database = Database(database_url)
        self.metadata = MetaData()
        self.locations = Table(
            "locations",
            self.metadata,
            Column("search_query", Text, nullable=False, unique=True),
            Column("formatted_query", Text, nullable=False),
            Column("latitude", Float, nullable=False),
            Column("longitude", Float, nullable=False),
        )

    async def connect(self):
        try:
            await self.database.connect()
        except Exception as e:
            logger.error(f"Could not connect to the location store: {e}")
            raise StoreFailure("Could not connect to the location store") from e

    async def disconnect(self):
        await self.database.disconnect()

    async def create_schema(self) -> None:
        try:
            await self.database.execute(CreateTable(self.locations, if_not_exists=True))
        except Exception as e:
            logger.error(f"Could not create the locations table: {e}")
            raise StoreFailure("Could not create the locations table") from e

    async def get_by_search_query(self, search_query: str) -> Optional[LocationRecord]:
        query = self.locations.select().where(self.locations.c.search_query == search_query)
        try:
            row = await self.database.fetch_one(query)
        except Exception as e:
            logger.error(f"Location lookup failed for '{search_query}': {e}")
            raise StoreFailure("Location lookup failed") from e
        if row is None:
            return None
        return LocationRecord(
            search_query=row["search_query"],
            formatted_query=row["formatted_query"],
            latitude=row["latitude"],
            longitude=row["longitude"],
        )

    async def create(self, record: LocationRecord) -> None:
        # search_query が既に存在する場合は何もしない (同時ミス時の重複防止)
        query = self._insert().values(**record.model_dump()).on_conflict_do_nothing(
            index_elements=[self.locations.c.search_query]
        )
        try:
            await self.database.execute(query)
        except Exception as e:
            logger.error(f"Location write-back failed for '{record.search_query}': {e}")
            raise StoreFailure("Location write-back failed") from e

    def _insert(self):
        dialect = self.database.url.dialect
        if dialect in ("postgresql", "postgres"):
            return postgresql.insert(self.locations)
        if dialect == "sqlite":
            return sqlite.insert(self.locations)
        raise StoreFailure(f"Unsupported database dialect: {dialect}")
