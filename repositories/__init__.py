"""
Repositories package - Data access layer.

This package contains the JSON-backed caches and the collection store,
isolating the scrapers and services from file and network details.
"""

from repositories.cache_resolver import CacheAsideResolver
from repositories.card_repository import CardRepository
from repositories.collection_repository import CollectionStore

__all__ = ["CacheAsideResolver", "CardRepository", "CollectionStore"]
