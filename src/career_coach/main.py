#!/usr/bin/env python
"""
Career Coach - command line entry point.

Start the API server:
    career-coach serve
    # or: uvicorn career_coach.api.main:app --reload
"""

import sys

from career_coach.config import SERVER_CONFIG


def serve(host: str = SERVER_CONFIG["host"], port: int = SERVER_CONFIG["port"]):
    """
    Start the FastAPI server.
    """
    from career_coach.api.main import run_server
    run_server(host=host, port=port, reload=False)


def main():
    args = sys.argv[1:]
    if not args or args[0] == "serve":
        port = int(args[1]) if len(args) > 1 else SERVER_CONFIG["port"]
        serve(port=port)
    else:
        print(f"Unknown command: {args[0]}")
        print("Usage: career-coach serve [port]")
        sys.exit(1)


if __name__ == "__main__":
    main()
