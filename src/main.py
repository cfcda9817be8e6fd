"""Main application entry point for the FastAPI application.

This module serves as the central entry point for the application.
It creates the FastAPI instance using the application factory pattern.

Run with ``uvicorn src.main:app`` or ``python -m src.main``.
"""

import uvicorn

from src.core.application import create_application
from src.core.config.settings import get_settings

# Create the FastAPI application
app = create_application()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT, log_config=None)
