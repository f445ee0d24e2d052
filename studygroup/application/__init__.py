"""
Application layer.

Use cases orchestrate the domain model: they load aggregates through
repository protocols, invoke domain operations and persist the result.
"""
