"""
Application package.

``core`` holds configuration, logging, persistence and security;
``schemas`` the pydantic request/response models; ``services`` the
business logic and SQL; ``api`` the routers and FastAPI dependencies.
The application object is built by ``main.create_app``.
"""

from .main import create_app  # noqa: F401
