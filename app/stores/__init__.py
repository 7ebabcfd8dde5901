"""
Stores Package

Interchangeable mapping backends sharing one interface:
- base: MappingStore interface
- mongo_store: MongoDB (primary tier)
- api_store: Remote mapping API (alternative primary tier)
- file_store: Local JSON file (secondary tier)
- embedded_store: In-process store (tertiary tier)
"""

__all__ = ["base", "mongo_store", "api_store", "file_store", "embedded_store"]
