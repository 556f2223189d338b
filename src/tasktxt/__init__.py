"""tasktxt - Personal task tracking in two flat text files.

Pending tasks are kept in task.txt and completed tasks in completed.txt,
both in the current working directory.

Installation:
    uv pip install -e .
"""

__version__ = "0.1.0"
