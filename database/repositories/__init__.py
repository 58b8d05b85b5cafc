from database.repositories.base import BaseRepository
from database.repositories.catalog import CatalogRepository

__all__ = [
    'BaseRepository',
    'CatalogRepository',
]
