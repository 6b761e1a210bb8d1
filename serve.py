#!/usr/bin/env python3
"""
PD Checker - Web Server

Starts the planning rights API under uvicorn. Options given here are
passed to the app through its environment variables.

Usage:
    python serve.py [--port PORT] [--host HOST] [--store PATH] [--log-level LEVEL]

Example:
    python serve.py --port 8080 --store data/properties.json
"""

import argparse
import os

import uvicorn


def main():
    parser = argparse.ArgumentParser(
        description="PD Checker - Planning Rights API Server"
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=8080,
        help="Port to listen on (default: 8080)"
    )
    parser.add_argument(
        "--host", "-H",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--store",
        type=str,
        default=None,
        help="Property facts JSON file (sets PROPERTY_FACTS_PATH)"
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (sets PD_CHECKER_LOG_LEVEL)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes"
    )

    args = parser.parse_args()

    # Read by web.app at import time, including in reload workers
    if args.store:
        os.environ["PROPERTY_FACTS_PATH"] = args.store
    if args.log_level:
        os.environ["PD_CHECKER_LOG_LEVEL"] = args.log_level

    print(f"PD Checker API on http://{args.host}:{args.port}/api/health")
    uvicorn.run(
        "web.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level or "info",
    )


if __name__ == "__main__":
    main()
