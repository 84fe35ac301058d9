"""
Main entry point for the parley API.

Usage:
    python run_fastapi.py

Or with uvicorn directly:
    uvicorn parley.fastapi_app:app --host 0.0.0.0 --port 5001 --reload
"""

import logging
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

import uvicorn

from parley.config.settings import get_config

logger = logging.getLogger("parley.run")

if __name__ == "__main__":
    env = os.getenv("PARLEY_ENV", "development")
    config = get_config(env)
    debug = config.DEBUG

    logger.info(f"Starting parley in {env} mode on http://{config.HOST}:{config.PORT}")

    uvicorn.run(
        "parley.fastapi_app:app",
        host=config.HOST,
        port=config.PORT,
        reload=debug,
        log_level="info" if debug else "warning",
    )
