"""
Domain layer.

The domain layer contains the core business logic of the application.
It has no dependencies on external frameworks or infrastructure.

This layer contains:
- Entities: Themes, learning logs and meta notes, each owned by one user
- Value Objects: Typed identifiers
- The lifecycle state machine shared by every entity
"""
