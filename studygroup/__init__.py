"""Study group scheduling and proof-of-attendance service."""
