"""
Server entrypoint: run the FastAPI app under uvicorn.

Run from the backend dir: python backend_entry.py [--host 0.0.0.0] [--port 8000]
Port falls back to the PORT env var, then 8000.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

# Ensure backend dir is on path so "from main import app" works when run as a script
_backend_dir = Path(__file__).resolve().parent
if str(_backend_dir) not in sys.path:
    sys.path.insert(0, str(_backend_dir))


def _default_port() -> int:
    try:
        return int(os.environ.get("PORT", "8000"))
    except ValueError:
        return 8000


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the roster-sync backend")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser.add_argument("--port", type=int, default=_default_port(), help="Bind port")
    args = parser.parse_args()

    from main import app
    from version import get_version
    import uvicorn

    logger = logging.getLogger(__name__)
    logger.info("Backend entry: version=%s host=%s port=%s", get_version(), args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")
    return 0


if __name__ == "__main__":
    sys.exit(main())
