# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Reading and position-preserving editing of INCAR files.

`IncarFile` models the file as an ordered list of typed lines (assignments and
passthrough lines). Tags are matched case-insensitively, ignoring leading
whitespace and trailing '#'/'!' comments. Edits rewrite the first matching
line in place or append a new line; every other line is written back verbatim.
The module-level functions load a file, apply one operation and save it
atomically.
"""

from .editor import (
    AssignmentLine,
    IncarFile,
    PassthroughLine,
    delete_key,
    get_value,
    has_key,
    parse_line,
    set_or_append,
)

__all__ = [
    "AssignmentLine",
    "IncarFile",
    "PassthroughLine",
    "delete_key",
    "get_value",
    "has_key",
    "parse_line",
    "set_or_append",
]
