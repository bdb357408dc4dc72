"""
Entry point for running annalist as a module.

Usage:
    python -m annalist [command] [options]
"""

from annalist.cli import main

if __name__ == "__main__":
    main()
