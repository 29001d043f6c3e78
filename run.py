#!/usr/bin/env python3
"""
Loan Tradeoff API Entry Point

Starts the FastAPI server with host and port from TRADEOFF_* settings.
"""

import sys

from loan_tradeoff.api import run_server
from loan_tradeoff.config import get_config


if __name__ == "__main__":
    settings = get_config()

    print("Starting Loan Tradeoff API...")
    print(f"API available at: http://{settings.api_host}:{settings.api_port}")
    print(f"Documentation at: http://{settings.api_host}:{settings.api_port}/docs")
    print()

    try:
        run_server(
            host=settings.api_host,
            port=settings.api_port,
            reload=settings.api_reload
        )
    except KeyboardInterrupt:
        print("\nShutting down Loan Tradeoff API...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)
