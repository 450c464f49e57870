"""
Main entry point for mm3u.

Allows running the package as a script: ``python -m mm3u --list ... --dir ...``.
"""

from .cli import app

if __name__ == "__main__":
    app()
