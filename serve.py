"""Start the HTTP API.

    python serve.py            # port from PORT / .env, default 3000
"""

import uvicorn

from careers_engine.config import Settings
from careers_engine.logging_setup import setup_logging


if __name__ == "__main__":
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    uvicorn.run("careers_engine.api:app", host="0.0.0.0", port=settings.port)
