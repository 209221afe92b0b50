from .outbox import EmailOutbox
from .services import LoggingEmailService, SmtpEmailService, build_email_service

__all__ = [
    "EmailOutbox",
    "LoggingEmailService",
    "SmtpEmailService",
    "build_email_service",
]
