"""
実際のSQLiteを使うテスト用の非同期ヘルパー
"""
from contextlib import asynccontextmanager

from city_explorer.repositories.location_repository import LocationRepository


@asynccontextmanager
async def open_repository(database_url):
    """スキーマ作成済みで接続したリポジトリ (終了時に切断)"""
    repository = LocationRepository(database_url)
    await repository.connect()
    try:
        await repository.create_schema()
        yield repository
    finally:
        await repository.disconnect()


async def count_rows(repository, search_query):
    rows = await repository.database.fetch_all(
        repository.locations.select().where(repository.locations.c.search_query == search_query)
    )
    return len(rows)
