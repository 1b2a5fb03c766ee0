"""Structural validation of parsed documents"""

from typing import Iterable, Optional

from pydantic import BaseModel, Field

from postdoc.core.errors import DocumentError
from postdoc.core.extract.directives import DEFAULT_BLOCKS, TAG_RE
from postdoc.core.models import CodeBlock, Document, TemplateDirective
from postdoc.core.parse import parse_text


class ValidatorConfig(BaseModel):
    required_keys: set[str] = Field(default_factory=set, description="Metadata keys that must be present and non-empty")


class Violation(BaseModel):
    """One broken invariant, located by 1-based source line when known."""
    kind: str
    message: str
    line: Optional[int] = None

    def __str__(self) -> str:
        where = f"line {self.line}: " if self.line is not None else ""
        return f"{where}{self.kind}: {self.message}"


def _close_name(tag: str) -> Optional[str]:
    m = TAG_RE.fullmatch(tag)
    return m.group(1) if m else None


def _check_directives(doc: Document) -> list[Violation]:
    """Every directive must carry a closing tag that names its own family."""
    violations = []
    for seg in doc.walk():
        if isinstance(seg, TemplateDirective):
            name = seg.name
        elif isinstance(seg, CodeBlock):
            name = "highlight"
        else:
            continue
        closed_by = _close_name(seg.close_tag)
        if closed_by != f"end{name}":
            found = f"'{seg.close_tag}'" if seg.close_tag else "nothing"
            violations.append(Violation(
                kind="UnmatchedDirective",
                message=f"'{seg.open_tag}' is closed by {found}",
                line=seg.line,
            ))
    return violations


def _check_required(doc: Document, required: Iterable[str]) -> list[Violation]:
    header_line = 1 if doc.header is not None else None
    return [
        Violation(
            kind="EmptyRequiredField",
            message=f"metadata key '{key}' is missing" if key not in doc.metadata
                    else f"metadata key '{key}' is empty",
            line=header_line,
        )
        for key in sorted(required)
        if not doc.metadata.get(key, "").strip()
    ]


def validate_document(doc: Document, config: ValidatorConfig = None) -> list[Violation]:
    """Return every violation in doc; an empty list means the document is valid."""
    config = config or ValidatorConfig()
    return _check_directives(doc) + _check_required(doc, config.required_keys)


def validate_text(
    text: str,
    config: ValidatorConfig = None,
    block_directives: Iterable[str] = DEFAULT_BLOCKS,
    ) -> list[Violation]:
    """Parse then validate; a parse failure becomes a single violation."""
    try:
        doc = parse_text(text, block_directives)
    except DocumentError as e:
        return [Violation(kind=e.kind, message=e.message, line=e.line)]
    return validate_document(doc, config)
