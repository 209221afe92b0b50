from .user import InMemoryUserRepository

__all__ = ["InMemoryUserRepository"]
