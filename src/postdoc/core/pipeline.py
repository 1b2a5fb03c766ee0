"""Batch step functions: check and parse a corpus of post files"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from postdoc.config import Settings
from postdoc.core.errors import DocumentError
from postdoc.core.models import Document
from postdoc.core.parse import discover_files, parse_file
from postdoc.core.utils.slug import split_post_name
from postdoc.core.validate import ValidatorConfig, Violation, validate_text


logger = logging.getLogger(__name__)


class FileReport(BaseModel):
    """Validation outcome for one file; slug and posting date come from the filename."""
    path: Path
    slug: str
    posted: Optional[date] = None
    violations: list[Violation] = []

    @property
    def ok(self) -> bool:
        return not self.violations


def _decode_violation(e: UnicodeDecodeError) -> Violation:
    return Violation(
        kind="InvalidEncoding",
        message=f"not valid {e.encoding}: {e.reason} at byte offset {e.start}",
    )


def check_file(path: Path, settings: Settings) -> FileReport:
    """Validate a single file; each file is judged atomically."""
    posted, slug = split_post_name(path.stem)
    config = ValidatorConfig(required_keys=set(settings.required_keys))
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        violations = [_decode_violation(e)]
    else:
        violations = validate_text(text, config, settings.block_directives)
    logger.debug("%s: %d violation(s)", path, len(violations))
    return FileReport(path=path, slug=slug, posted=posted, violations=violations)


def run_check(path: str, settings: Settings) -> list[FileReport]:
    """Validate every post under path. A failing file never stops the batch."""
    files = discover_files(Path(path), settings.extensions)
    logger.info("Checking %d file(s) under %s", len(files), path)
    return [check_file(p, settings) for p in files]


def run_parse(path: str, settings: Settings) -> list[tuple[Path, Document]]:
    """Parse every post under path. Returns (source_path, document) pairs."""
    results = []
    for p in discover_files(Path(path), settings.extensions):
        try:
            results.append((p, parse_file(p, settings.block_directives)))
        except (DocumentError, UnicodeDecodeError) as e:
            raise RuntimeError(f"Failed to parse {p}: {e}") from e
    return results
