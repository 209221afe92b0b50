"""cleanauth: user registration and JWT authentication API."""

__version__ = "0.1.0"
