"""
Convenience entry point for running profileeditor as a module.

Usage: python -m profileeditor [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
