from .email_dispatcher import EmailDispatcher

__all__ = ["EmailDispatcher"]
