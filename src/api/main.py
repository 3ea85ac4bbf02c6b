"""ASGI entry point.

Run with:  uvicorn api.main:app   (from src/)
      or:  python -m api.main
"""

from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before Settings.from_env()
load_dotenv()

from api.app import create_app
from api.settings import Settings
from utils.logging import setup_structured_logging

settings = Settings.from_env()

# Set up structured JSON logging
setup_structured_logging(settings.log_level)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn
    # Disable uvicorn access logs; RequestIdMiddleware writes one line per request
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        access_log=False,
    )
