"""Study groups application module."""
