"""
Entry point for running nom as a module.

Usage: python -m nom [command] [options]
"""

from nom.cli.parser import main

if __name__ == "__main__":
    main()
