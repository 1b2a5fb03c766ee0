"""Slug and date extraction from post filenames"""

import re
from datetime import date
from typing import Optional


POST_NAME_RE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})-(.+)$')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def split_post_name(stem: str) -> tuple[Optional[date], str]:
    """Split a 'YYYY-MM-DD-title' filename stem into (date, slug).

    Stems without a valid date prefix return (None, slugify(stem)).
    """
    m = POST_NAME_RE.match(stem)
    if m:
        try:
            posted = date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None, slugify(stem)
        return posted, slugify(m.group(4))
    return None, slugify(stem)
