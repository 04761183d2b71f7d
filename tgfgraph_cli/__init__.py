"""
CLI module for tgfgraph.

The command-line interface providing traverse, info, and format commands.
"""

from tgfgraph_cli.main import app

__all__ = ["app"]
