"""
Application layer.

The application layer orchestrates domain objects and defines the boundaries
of the system. It contains use cases that represent the operations available
to external actors.

This layer contains:
- Use Cases: One class per resource, orchestrating repositories
- DTOs: Filters, create payloads, patches and read models
- Protocols: Repository interfaces implemented by the infrastructure layer
- Pagination: Opaque cursors and page assembly
"""
