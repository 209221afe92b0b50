"""
Name: ASGI Entrypoint (cleanauth.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
    (uvicorn cleanauth.main:app)

Notes/Constraints:
  - No configuration or IO should live here; keep it thin and predictable
"""

from cleanauth.api.main import app

__all__ = ["app"]
