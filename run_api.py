#!/usr/bin/env python3
"""
Startup script for the Tether API server.
"""

from tether.main import run_api_server

if __name__ == "__main__":
    run_api_server()
