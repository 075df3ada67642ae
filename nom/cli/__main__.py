"""
Entry point for running the nom CLI as a module.

Usage: python -m nom.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
