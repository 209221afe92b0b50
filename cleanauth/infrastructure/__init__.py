"""Infrastructure adapters: cache, persistence, email."""
