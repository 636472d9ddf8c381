#!/usr/bin/env python3
"""FastAPI server entry point for FindOrigin."""

import uvicorn
from dotenv import load_dotenv

from utils.logger import LoggerConfig

load_dotenv()

if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="FindOrigin FastAPI Server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--log-level", default="INFO", help="Application log level")

    args = parser.parse_args()

    LoggerConfig.setup_logging(level=args.log_level)

    uvicorn.run(
        "server.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )
