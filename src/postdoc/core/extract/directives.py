"""Stack-based scan of block directives into a segment tree"""

import logging
import re
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Iterable, Optional

from postdoc.core.errors import UnmatchedDirective
from postdoc.core.models import CodeBlock, PlainMarkup, Segment, TemplateDirective


logger = logging.getLogger(__name__)

TAG_RE = re.compile(r'\{%-?\s*(\w+)(?:\s+(.*?))?\s*-?%\}', re.DOTALL)
DEFAULT_BLOCKS = ("highlight", "raw", "comment")

CODE = "highlight"
RAW = "raw"
OPAQUE = {CODE, "comment"}          # only their own closing tag is recognized inside


@dataclass
class _Frame:
    """An open directive awaiting its closing tag; the root frame has no name."""
    name:       Optional[str]
    arg:        Optional[str]
    open_tag:   str
    line:       int
    column:     int
    body_start: int
    children:   list = field(default_factory=list)


class _Locator:
    """Map string offsets to 1-based (line, column) in the original source."""

    def __init__(self, text: str, line_offset: int):
        self._newlines = [i for i, c in enumerate(text) if c == "\n"]
        self._line_offset = line_offset

    def __call__(self, offset: int) -> tuple[int, int]:
        idx = bisect_left(self._newlines, offset)
        line_start = self._newlines[idx - 1] + 1 if idx else 0
        return self._line_offset + idx, offset - line_start + 1


def _closes(name: str, blocks: set[str]) -> Optional[str]:
    """Return the family closed by `name` (e.g. 'endraw' -> 'raw'), else None."""
    if name.startswith("end") and name[3:] in blocks:
        return name[3:]
    return None


def _recognized(name: str, top: _Frame, blocks: set[str]) -> bool:
    """Apply the nesting policy: which tags are live inside the innermost region."""
    if top.name in OPAQUE:
        return name == f"end{top.name}"
    if top.name == RAW:
        return name == "endraw" or (name == CODE and CODE in blocks)
    return name in blocks or _closes(name, blocks) is not None


def _build(frame: _Frame, close_tag: str, body: str, end: int) -> Segment:
    """Turn a closed frame into its segment."""
    if frame.name == CODE:
        language, options = None, None
        if frame.arg:
            language, _, rest = frame.arg.partition(" ")
            options = rest.strip() or None
        return CodeBlock(
            language=language,
            options=options,
            open_tag=frame.open_tag,
            close_tag=close_tag,
            source=body[frame.body_start:end],
            line=frame.line,
        )
    return TemplateDirective(
        name=frame.name,
        arg=frame.arg,
        open_tag=frame.open_tag,
        close_tag=close_tag,
        children=frame.children,
        line=frame.line,
    )


def scan_directives(
    body: str,
    block_directives: Iterable[str] = DEFAULT_BLOCKS,
    line_offset: int = 1,
    ) -> list[Segment]:
    """Split body into PlainMarkup / TemplateDirective / CodeBlock segments.

    Only tags named in block_directives (or their `end` forms) delimit
    regions; every other tag stays inside the surrounding plain text.
    Raises UnmatchedDirective on stray, crossed, or unclosed directives.
    """
    blocks = set(block_directives)
    locate = _Locator(body, line_offset)
    stack = [_Frame(name=None, arg=None, open_tag="", line=line_offset, column=1, body_start=0)]
    pos = 0

    def _flush(end: int) -> None:
        top = stack[-1]
        # opaque regions keep their payload as one slice, taken when they close
        if end > pos and top.name != CODE:
            top.children.append(PlainMarkup(text=body[pos:end], line=locate(pos)[0]))

    for m in TAG_RE.finditer(body):
        name, arg = m.group(1), (m.group(2) or "").strip() or None
        top = stack[-1]
        if not _recognized(name, top, blocks):
            continue

        _flush(m.start())
        line, column = locate(m.start())
        family = _closes(name, blocks)
        if family is None:
            stack.append(_Frame(name, arg, m.group(0), line, column, m.end()))
        elif top.name is None:
            raise UnmatchedDirective(f"'{m.group(0)}' has no open '{family}' directive", line, column)
        elif family != top.name:
            raise UnmatchedDirective(
                f"'{m.group(0)}' closes '{family}' but '{top.name}' "
                f"opened at line {top.line} is still open",
                line, column,
            )
        else:
            stack.pop()
            stack[-1].children.append(_build(top, m.group(0), body, m.start()))
        pos = m.end()

    _flush(len(body))
    if len(stack) > 1:
        open_frame = stack[-1]
        raise UnmatchedDirective(
            f"'{open_frame.open_tag}' is never closed",
            open_frame.line, open_frame.column,
        )

    segments = stack[0].children
    logger.debug("Scanned %d top-level segment(s)", len(segments))
    return segments
