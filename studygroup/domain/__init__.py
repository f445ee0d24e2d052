"""
Domain layer.

The domain layer contains the core business logic of the application.
It has no dependencies on external frameworks or infrastructure.

This layer contains:
- Entities: Groups and the Sessions they own
- Value Objects: identifiers, group codes, passes and attendances
- Aggregate Roots: the Group consistency boundary
"""
