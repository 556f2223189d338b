"""Main entry point for tasktxt.

Supports both direct invocation (`python -m tasktxt`) and the `task`
console script.
"""

from tasktxt.cli import cli

if __name__ == "__main__":
    cli()
