#!/usr/bin/env python
"""
Page object generator CLI entry point.

Usage:
    python cli.py -url https://www.example.com/login
    python cli.py -file pages/login.html -out generated
    python cli.py -url https://example.com -timeout 5
"""

from src.cli.app import main

if __name__ == "__main__":
    main()
