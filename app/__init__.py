"""
NAMASTE Mapping Service Package

This package contains the components of the NAMASTE to ICD-11 mapping service:
- core: Configuration, errors, logging, and MongoDB infrastructure
- stores: Interchangeable mapping backends (MongoDB, remote API, JSON file, embedded)
- services: Query normalization, search, fallback coordination, stats, auditing
- models: Pydantic and dataclass models for mappings, queries and API schemas
- api: FastAPI routers for mapping and monitoring endpoints
"""

__version__ = "1.0.0"
__all__ = ["core", "stores", "services", "models", "api", "data"]
