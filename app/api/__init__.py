"""
API Package

Contains FastAPI routers for:
- mappings_api: /mappings search, lookup, bulk insert, clear, stats and metadata
- monitoring_api: /status endpoint for service and fallback state
"""

__all__ = ["mappings_api", "monitoring_api"]
