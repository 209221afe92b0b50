from .user import PostgresUserRepository

__all__ = ["PostgresUserRepository"]
