"""HTTP routers for study groups, their sessions and attendance."""
