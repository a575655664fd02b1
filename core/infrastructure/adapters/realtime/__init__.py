"""Real-time publishers (Redis pub/sub and in-memory)."""
