"""
Core Infrastructure Package

Contains shared infrastructure components:
- config: Application configuration and settings
- errors: Classified error taxonomy shared by stores, services and API
- logging: Structured JSON logging utilities
- mongo: MongoDB client singleton and index management
"""

__all__ = ["config", "errors", "logging", "mongo"]
