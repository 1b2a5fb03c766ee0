"""File discovery, metadata header extraction, and document parsing"""

import re
from pathlib import Path
from typing import Iterable, Optional

from postdoc.core.errors import DuplicateKey, MalformedHeader
from postdoc.core.extract.directives import DEFAULT_BLOCKS, scan_directives
from postdoc.core.models import Document


HEADER_MARKER = "---"
HEADER_LINE_RE = re.compile(r'^([A-Za-z_][\w.-]*)\s*:(.*)$')
LINE_RE = re.compile(r'(?<=\n)')            # split after \n only, keeping it
POST_EXTENSIONS = ('.html', '.md', '.markdown')


def _is_marker(line: str) -> bool:
    return line.rstrip() == HEADER_MARKER


def _unquote(value: str) -> str:
    """Strip one matching pair of surrounding single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value


def split_header(text: str) -> tuple[dict[str, str], Optional[str], str, int]:
    """Return (metadata, raw_header, body, body_offset) for a document.

    A header exists only when the very first line is the `---` marker; it
    runs to the next marker line. Blank and `#` comment lines are skipped.
    Lines break on line feeds only, matching body line numbering.
    """
    lines = [line for line in LINE_RE.split(text) if line]
    if not lines or not _is_marker(lines[0]):
        return {}, None, text, 1

    metadata: dict[str, str] = {}
    first_seen: dict[str, int] = {}
    for i, line in enumerate(lines[1:], start=1):
        lineno = i + 1
        if _is_marker(line):
            header = "".join(lines[:i + 1])
            return metadata, header, text[len(header):], lineno + 1

        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        m = HEADER_LINE_RE.match(stripped)
        if not m:
            raise MalformedHeader(f"expected 'key: value', got {stripped!r}", lineno)
        key, value = m.group(1), _unquote(m.group(2).strip())
        if key in metadata:
            raise DuplicateKey(
                f"duplicate metadata key '{key}' (first defined on line {first_seen[key]})",
                lineno,
            )
        metadata[key] = value
        first_seen[key] = lineno

    raise MalformedHeader(f"header opened with '{HEADER_MARKER}' is never closed", 1)


def parse_text(text: str, block_directives: Iterable[str] = DEFAULT_BLOCKS) -> Document:
    """Parse raw document text into a Document. Pure; raises DocumentError subclasses."""
    metadata, header, body, body_offset = split_header(text)
    return Document(
        metadata=metadata,
        header=header,
        body=scan_directives(body, block_directives, line_offset=body_offset),
        body_offset=body_offset,
    )


def parse_file(path: Path, block_directives: Iterable[str] = DEFAULT_BLOCKS) -> Document:
    """Read a UTF-8 file and parse it."""
    return parse_text(path.read_text(encoding='utf-8'), block_directives)


def discover_files(path: Path, extensions: Iterable[str] = POST_EXTENSIONS) -> list[Path]:
    """Return sorted post files under path, or [path] if a single matching file."""
    suffixes = set(extensions)
    if path.is_file():
        return [path] if path.suffix in suffixes else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in suffixes)
