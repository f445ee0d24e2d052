"""
Infrastructure layer.

Persistence (SQLAlchemy repositories and mappers), HTTP routers and
schemas, and adapters for collaborators outside the domain.
"""
