# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import os
import re
import shutil
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Self, TypeAlias

from vh_lib.core.common import parse_leading_number
from vh_lib.core.error import VHError
from vh_lib.core.logger import get_logger

logger = get_logger(__name__)

# Everything from the first comment character to the end of the line.
_COMMENT = re.compile(r"[#!].*$")

# 'KEY = VALUE' assignment with the comment already stripped.
_ASSIGNMENT = re.compile(r"^\s*([^=\s]+)\s*=\s*(.*?)\s*$")

# A single line including its '\n' terminator, if any.
_LINE = re.compile(r"[^\n]*\n|[^\n]+")

# Bytes that are not valid UTF-8 are carried as surrogates and written back unchanged.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class PassthroughLine:
    """Comment, blank or otherwise unrecognized INCAR line."""

    raw: str
    end: str = ""


@dataclass(frozen=True)
class AssignmentLine:
    """INCAR line assigning a value to a tag."""

    raw: str
    key: str
    value: str
    end: str = ""

    def matches(self, key: str) -> bool:
        """Check whether the line assigns the given tag (case-insensitive)."""
        return self.key.upper() == key.upper()


IncarLine: TypeAlias = PassthroughLine | AssignmentLine


def parse_line(raw: str, end: str = "") -> IncarLine:
    """
    Classify a single INCAR line.

    Comments introduced by '#' or '!' are ignored when looking for an assignment
    but are kept in the raw text of the line.

    Args:
        raw (str): The line without its line terminator.
        end (str): The line terminator ('\\n', '\\r\\n' or '' for an unterminated last line).

    Returns:
        IncarLine: AssignmentLine for 'KEY = VALUE' lines, PassthroughLine otherwise.
    """
    if match := _ASSIGNMENT.match(_COMMENT.sub("", raw)):
        return AssignmentLine(raw, match.group(1), match.group(2), end)

    return PassthroughLine(raw, end)


def _split_terminator(chunk: str) -> tuple[str, str]:
    """Split a line into its content and its terminator."""
    for end in ("\r\n", "\n"):
        if chunk.endswith(end):
            return chunk[: -len(end)], end

    return chunk, ""


class IncarFile:
    """
    Ordered, position-preserving representation of an INCAR file.

    Only the first assignment of a tag is authoritative. Later duplicates are
    never inspected nor edited but are written back verbatim.
    """

    def __init__(self, lines: list[IncarLine], path: Path | None = None):
        """
        Initialize an IncarFile.

        Args:
            lines (list[IncarLine]): Parsed lines of the file.
            path (Path | None): File the lines were read from. Used by `toFile`
                when no explicit path is provided.
        """
        self._lines = lines
        self._path = path

    @classmethod
    def fromFile(cls, path: Path) -> Self:
        """
        Load and parse an INCAR file.

        Line terminators and bytes that are not valid UTF-8 are kept as they are.

        Args:
            path (Path): Path to the INCAR file.

        Returns:
            IncarFile: The parsed file.

        Raises:
            VHError: If the file does not exist or cannot be read.
        """
        try:
            with path.open(encoding=_ENCODING, errors=_ERRORS, newline="") as file:
                text = file.read()
        except OSError as e:
            raise VHError(f"Could not read INCAR file '{path}': {e}.") from e

        return cls.fromString(text, path)

    @classmethod
    def fromString(cls, text: str, path: Path | None = None) -> Self:
        """Parse INCAR content."""
        return cls(
            [parse_line(*_split_terminator(chunk)) for chunk in _LINE.findall(text)],
            path,
        )

    def toString(self) -> str:
        """Serialize the file back to text. Unchanged lines are reproduced verbatim."""
        return "".join(line.raw + line.end for line in self._lines)

    def toFile(self, path: Path | None = None) -> None:
        """
        Write the file atomically.

        The content is written into a temporary file in the target directory
        which then replaces the target.

        Args:
            path (Path | None): Target path. Defaults to the path the file was read from.

        Raises:
            VHError: If no path is known or the file cannot be written.
        """
        if not (path := path or self._path):
            raise VHError("No path to write the INCAR file to.")

        try:
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
            with os.fdopen(
                fd, "w", encoding=_ENCODING, errors=_ERRORS, newline=""
            ) as file:
                file.write(self.toString())
            if path.exists():
                shutil.copymode(path, tmp)
            os.replace(tmp, path)
        except OSError as e:
            raise VHError(f"Could not write INCAR file '{path}': {e}.") from e

    def hasKey(self, key: str) -> bool:
        """Check whether the tag is assigned anywhere in the file."""
        return self._findIndex(key) is not None

    def getValue(self, key: str) -> str | None:
        """
        Get the value of the first assignment of a tag.

        Args:
            key (str): The tag (case-insensitive).

        Returns:
            str | None: The value without comments and surrounding whitespace,
                or None if the tag is not assigned.
        """
        if (index := self._findIndex(key)) is None:
            return None

        return self._lines[index].value  # ty: ignore[possibly-missing-attribute]

    def getInt(self, key: str) -> int | None:
        """
        Get the value of a tag as an integer.

        Only the leading numeric token is considered and it is truncated,
        so '2;' gives 2 and '1.7' gives 1.

        Returns:
            int | None: The integer value or None if the tag is not assigned
                or its value does not start with a number.
        """
        if (number := parse_leading_number(self.getValue(key))) is None:
            return None

        return int(number)

    def getFloat(self, key: str) -> float | None:
        """Get the leading numeric token of a tag's value as a float."""
        return parse_leading_number(self.getValue(key))

    def setOrAppend(self, key: str, value: str) -> None:
        """
        Assign a value to a tag.

        The first existing assignment is rewritten in place as 'KEY = VALUE'
        and keeps its line terminator. If the tag is not assigned, a blank line
        and 'KEY = VALUE' are appended using the file's line terminator.
        """
        text = f"{key} = {value}"

        if (index := self._findIndex(key)) is not None:
            self._lines[index] = AssignmentLine(text, key, value, self._lines[index].end)
            return

        newline = self._newline()
        if self._lines and not self._lines[-1].end:
            self._lines[-1] = replace(self._lines[-1], end=newline)

        self._lines.extend(
            [PassthroughLine("", newline), AssignmentLine(text, key, value, newline)]
        )

    def deleteKey(self, key: str) -> bool:
        """
        Remove the first assignment of a tag.

        Returns:
            bool: True if a line was removed, False if the tag was not assigned.
        """
        if (index := self._findIndex(key)) is None:
            return False

        del self._lines[index]
        return True

    def _findIndex(self, key: str) -> int | None:
        """Index of the first line assigning the tag."""
        for i, line in enumerate(self._lines):
            if isinstance(line, AssignmentLine) and line.matches(key):
                return i

        return None

    def _newline(self) -> str:
        """Line terminator used by the file. Defaults to '\\n'."""
        return next((line.end for line in self._lines if line.end), "\n")


def has_key(key: str, file: Path) -> bool:
    """Check whether an INCAR file assigns the tag."""
    return IncarFile.fromFile(file).hasKey(key)


def get_value(key: str, file: Path) -> str | None:
    """Get the value of the first assignment of a tag in an INCAR file."""
    return IncarFile.fromFile(file).getValue(key)


def set_or_append(key: str, value: str, file: Path) -> None:
    """Rewrite the tag's line in place or append it, then save the file atomically."""
    incar = IncarFile.fromFile(file)
    incar.setOrAppend(key, value)
    incar.toFile()
    logger.debug(f"Set {key} = {value} in '{file}'.")


def delete_key(key: str, file: Path) -> None:
    """Remove the first line assigning the tag and save the file atomically."""
    incar = IncarFile.fromFile(file)
    if incar.deleteKey(key):
        incar.toFile()
        logger.debug(f"Removed {key} from '{file}'.")
