"""
Application Layer

Contains use cases, command handlers, and application services.
This layer orchestrates domain objects and infrastructure to fulfill use cases.

Structure:
- commands/: write operations (PlayCatalogUrlCommand)
- services/: resolution pipeline and queue service
- interfaces/: Port interfaces for infrastructure adapters
"""
