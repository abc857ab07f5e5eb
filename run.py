#!/usr/bin/env python3
"""
Sit-and-Go Hold'em - Server Startup Script

Table settings come from SITNGO_* environment variables
(SITNGO_SMALL_BLIND, SITNGO_BIG_BLIND, SITNGO_STARTING_STACK,
SITNGO_STAGE_DELAY_MS, SITNGO_AI_TURN_DELAY_MS, SITNGO_SEED).

Usage:
    python run.py [--host HOST] [--port PORT] [--reload]
"""

import argparse
import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Sit-and-Go Hold'em Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    args = parser.parse_args()

    uvicorn.run(
        "sitngo.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
