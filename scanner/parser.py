"""Line-oriented extraction of imports, headers and base types from source text."""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Protocol


# Lines that belong to a file's header rather than its body
HEADER_MARKERS = ("SPDX-License", "pragma solidity")

IMPORT_RE = re.compile(r"^import\b")
IMPORT_TERMINATOR = ";"

# First composite type declared in a file
DECLARATION_RE = re.compile(r"^\s*(?:abstract\s+)?(?:contract|interface)\s+(\w+)")
LIBRARY_RE = re.compile(r"^\s*library\s+\w+")
INHERIT_RE = re.compile(r"\bis\b")


@dataclass
class ScannedSource:
    """Result of scanning one file's raw text."""

    specifiers: List[str] = field(default_factory=list)
    header: List[str] = field(default_factory=list)
    body: List[str] = field(default_factory=list)


class SourceExtractor(Protocol):
    """Extraction interface used by the dependency resolver."""

    def scan(self, text: str) -> ScannedSource:
        ...

    def find_bases(self, text: str) -> List[str]:
        ...


class LineExtractor:
    """Default extractor built on the line heuristics in this module."""

    def scan(self, text: str) -> ScannedSource:
        return scan_source(text)

    def find_bases(self, text: str) -> List[str]:
        return find_inheritance(text)


def split_lines(text: str) -> List[str]:
    """Split text on any of CRLF, CR or LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def is_header_line(line: str) -> bool:
    """Check whether a line is a license or version-pragma marker."""
    return any(marker in line for marker in HEADER_MARKERS)


def extract_specifier(statement: str) -> Optional[str]:
    """
    Return the first quoted string literal of an import statement.

    Single quotes are treated as double quotes and backslashes are
    normalized to forward slashes.

    Returns:
        The import target, or None if the statement holds no string literal.
    """
    normalized = statement.replace("'", '"')
    start = normalized.find('"')
    if start == -1:
        return None
    end = normalized.find('"', start + 1)
    if end == -1:
        return None
    return normalized[start + 1:end].replace("\\", "/")


def scan_source(text: str) -> ScannedSource:
    """
    Separate a file into import specifiers, header lines and body lines.

    An import statement is any line starting with the ``import`` keyword;
    lines are joined until a ``;`` appears. Header lines are collected
    wherever they occur. Leading and trailing blank body lines are dropped.

    Args:
        text: Raw file content.

    Returns:
        ScannedSource with de-duplicated specifiers in first-seen order.
    """
    lines = split_lines(text)
    result = ScannedSource()

    n = 0
    while n < len(lines):
        line = lines[n]
        if IMPORT_RE.match(line):
            statement = line
            while IMPORT_TERMINATOR not in statement and n + 1 < len(lines):
                n += 1
                statement += lines[n]
            specifier = extract_specifier(statement)
            if specifier and specifier not in result.specifiers:
                result.specifiers.append(specifier)
        elif is_header_line(line):
            result.header.append(line)
        else:
            result.body.append(line)
        n += 1

    result.body = _trim_blank(result.body)
    return result


def _trim_blank(lines: List[str]) -> List[str]:
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def _strip_line_comment(line: str) -> str:
    index = line.find("//")
    return line if index == -1 else line[:index]


def find_inheritance(text: str) -> List[str]:
    """
    Extract the base-type names of the first contract or interface in a file.

    Lines are skipped until a non-import line declares a contract or
    interface; a file that declares a library first has no bases. From the
    declaration onward text is accumulated up to the opening brace, and
    the names between ``is`` and ``{`` are returned. Constructor arguments
    such as ``Base(1, 2)`` are dropped.

    This is a heuristic: block comments or unusual formatting between the
    declaration and its brace may yield a partial or empty list.

    Args:
        text: Raw file content.

    Returns:
        Base-type names in declaration order, or an empty list.
    """
    lines = split_lines(text)
    declaration = None

    for index, line in enumerate(lines):
        if IMPORT_RE.match(line):
            continue
        if LIBRARY_RE.match(line):
            return []
        match = DECLARATION_RE.match(line)
        if match:
            declaration = (index, match.end())
            break

    if declaration is None:
        return []

    start, column = declaration
    collected = ""
    for offset, line in enumerate(lines[start:]):
        line = _strip_line_comment(line)
        if offset == 0:
            line = line[column:]
        brace = line.find("{")
        if brace != -1:
            collected += " " + line[:brace]
            break
        collected += " " + line
    else:
        return []

    marker = INHERIT_RE.search(collected)
    if marker is None:
        return []

    return _split_bases(collected[marker.end():])


def _split_bases(text: str) -> List[str]:
    """Split a base list on top-level commas, dropping constructor arguments."""
    bases: List[str] = []
    depth = 0
    current = ""
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0:
            bases.append(current)
            current = ""
        elif depth == 0:
            current += char
    bases.append(current)

    names = ["".join(base.split()) for base in bases]
    return [name for name in names if name]
