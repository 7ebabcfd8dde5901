"""
Services Package

Contains business logic services:
- query_normalizer: Raw request -> validated QueryDescriptor
- ranking: Shared in-process filter/rank/paginate rules
- fallback: Fallback coordinator selecting and demoting the active store
- search_engine: Normalize, search through the coordinator, audit
- stats_service: Dashboard statistics and facet lists
- mapping_service: Lookup, bulk insert, clear and seeding
- audit: Audit event sinks (MongoDB, structured log)
- factory: Builds the store tiers and services from settings
"""
__all__ = [
    "query_normalizer",
    "ranking",
    "fallback",
    "search_engine",
    "stats_service",
    "mapping_service",
    "audit",
    "factory",
]
