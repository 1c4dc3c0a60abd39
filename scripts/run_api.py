#!/usr/bin/env python3
"""Run the coding-mentor FastAPI server.

This script starts the uvicorn server for the persona API.

Usage:
    python scripts/run_api.py [--host HOST] [--port PORT] [--reload]

Environment:
    GROQ_API_KEY    - Required for completions (checked per call, warned here).
    MENTOR_API_HOST - Default bind host (default: 127.0.0.1)
    MENTOR_API_PORT - Default bind port (default: 8000)

Examples:
    python scripts/run_api.py
    python scripts/run_api.py --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

# Ensure imports work when invoked as a script
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


def main() -> int:
    """Run the API server."""
    parser = argparse.ArgumentParser(description="Run the coding-mentor API server.")
    parser.add_argument(
        "--host",
        default=os.environ.get("MENTOR_API_HOST", "127.0.0.1"),
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("MENTOR_API_PORT", "8000")),
        help="Port to bind to (default: 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    args = parser.parse_args()

    if not os.environ.get("GROQ_API_KEY", "").strip():
        print("Warning: GROQ_API_KEY is not set; every turn will end with an error", file=sys.stderr)

    print(f"Starting FastAPI server on {args.host}:{args.port}")
    print("Endpoints:")
    print(f"  - GET  http://{args.host}:{args.port}/personas")
    print(f"  - GET  http://{args.host}:{args.port}/turns/current")
    print(f"  - POST http://{args.host}:{args.port}/turns")
    print()

    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
