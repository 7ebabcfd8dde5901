"""
Models Package

Contains data models for:
- mapping: NAMASTE to ICD-11 mapping records
- query: Query descriptors, result pages, insert reports and statistics
- audit: Audit events written per search/stats call
- api_models: API request/response models
"""

__all__ = ["mapping", "query", "audit", "api_models"]
