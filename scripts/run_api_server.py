#!/usr/bin/env python3
"""Entry point script for running the Relay API server."""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn
from dotenv import load_dotenv

from relay_agents.api.config import load_config


def main():
    """Run the Relay API server."""
    server_config = load_config().server

    parser = argparse.ArgumentParser(description="Run the Relay API server")
    parser.add_argument(
        "--host",
        type=str,
        default=server_config.host,
        help=f"Host to bind to (default: {server_config.host})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=server_config.port,
        help=f"Port to bind to (default: {server_config.port})"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )

    args = parser.parse_args()

    # Load provider API keys before the app (and its provider chain) is created
    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)
        print(f"Loaded environment from {env_file}")

    print(f"Starting Relay API server on {args.host}:{args.port}")
    print(f"API docs available at: http://{args.host}:{args.port}/docs")

    uvicorn.run(
        "relay_agents.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
