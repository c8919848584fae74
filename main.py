"""
RevTags - Web Server Entry Point
================================

Run this to start the draft API:
    python main.py

Then POST to http://127.0.0.1:8000/api/draft
"""

import logging

import uvicorn

from revtags.infrastructure.config import get_settings

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)


def main():
    """Start the web server."""
    settings = get_settings()

    print("\n" + "=" * 50)
    print("   RevTags - Review Drafter")
    print("=" * 50)
    print(f"\n   Starting server at http://{settings.server.host}:{settings.server.port}")
    print("   Press Ctrl+C to stop\n")

    uvicorn.run(
        "revtags.web.app:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload,
        log_level="info"
    )


if __name__ == "__main__":
    main()
