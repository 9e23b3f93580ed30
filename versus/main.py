#!/usr/bin/env python3
"""Main entry point for the Versus product debate server."""

import logging
import os
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the web server."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    # Suppress noisy third-party loggers
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def print_usage() -> None:
    """Print usage information for local development."""
    print("Versus Product Debate")
    print("=" * 40)
    print("Start the API server:")
    print("   versus-server --web")
    print()
    print("Configuration:")
    print("   VERSUS_CONFIG   path to a JSON or YAML config (default: versus_config.json)")
    print("   GEMINI_API_KEY  key for the Gemini backend")
    print("   PORT            server port (default: 8000)")
    print()


def start_web_server() -> None:
    """Start the FastAPI web server."""
    from versus.config.settings import get_default_config

    setup_logging(get_default_config().system.log_level)

    import uvicorn

    from versus.web.api import app

    port = int(os.environ.get("PORT", 8000))
    logging.getLogger(__name__).info("Starting Versus debate server on port %s", port)

    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info", access_log=True)


def main() -> None:
    """Main entry point."""
    is_production = any([
        "PORT" in os.environ,
        os.environ.get("ENVIRONMENT") == "production",
    ])

    if is_production or "--web" in sys.argv:
        start_web_server()
    else:
        print_usage()


if __name__ == "__main__":
    main()
