"""
Front matter normalization.

Only the recognized keys are coerced: ``date`` becomes a datetime (or is
dropped), ``tags`` and ``categories`` become lists of strings. Every other
key is passed through as the YAML loader produced it.
"""

import fnmatch
from datetime import datetime, date
from typing import Any, Dict, Iterable, Optional

from .models import ItemType

DATE_FORMATS = [
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d %H:%M',
    '%Y-%m-%d',
    '%b %d, %Y',
    '%B %d, %Y',
    '%d %b %Y',
]

LIST_FIELDS = ('tags', 'categories')

# Scope names used in front_matter_defaults, keyed by item type.
SCOPE_TYPES = {
    ItemType.POST: 'posts',
    ItemType.PAGE: 'pages',
    ItemType.DRAFT: 'drafts',
}


def parse_date(value: Any) -> Optional[datetime]:
    """Convert a front matter date value to a datetime, or None."""
    if isinstance(value, datetime):
        return value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text.replace('Z', '+00:00'))
        except ValueError:
            pass
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
    return None


def _as_string_list(value):
    if isinstance(value, (list, tuple, set)):
        return [str(element) for element in value]
    return [str(value)]


def normalize_front_matter(raw: Dict[str, Any], diagnostics=None, source: str = '') -> Dict[str, Any]:
    """
    Return a normalized copy of a parsed front matter mapping.

    Args:
        raw: Mapping produced by the front matter parser.
        diagnostics: Optional DiagnosticCollector for non-fatal problems.
        source: Label (usually the relative path) used in diagnostics.

    Returns:
        A new dict; ``raw`` is left untouched.
    """
    front_matter = dict(raw or {})

    if 'date' in front_matter:
        original = front_matter['date']
        if original is None:
            del front_matter['date']
        else:
            parsed = parse_date(original)
            if parsed is None:
                del front_matter['date']
                if diagnostics is not None:
                    diagnostics.warning(source, f"Invalid date format in front matter: {original!r}")
            else:
                front_matter['date'] = parsed

    for key in LIST_FIELDS:
        if key not in front_matter:
            continue
        value = front_matter[key]
        if value is None:
            del front_matter[key]
            continue
        if not isinstance(value, (list, tuple, set)) and diagnostics is not None:
            diagnostics.warning(source, f"'{key}' field is not a list. Converting...")
        front_matter[key] = _as_string_list(value)

    return front_matter


def _scope_matches(scope, item_type, relative_path):
    scope_type = scope.get('type')
    if scope_type and scope_type != SCOPE_TYPES.get(item_type):
        return False
    scope_path = scope.get('path')
    if scope_path and not fnmatch.fnmatch(relative_path, scope_path):
        return False
    return True


def apply_front_matter_defaults(front_matter: Dict[str, Any], defaults: Iterable[Dict[str, Any]],
                                item_type: ItemType, relative_path: str) -> Dict[str, Any]:
    """
    Fill keys missing from ``front_matter`` with configured defaults.

    Each default entry has a ``scope`` ({type, path}) and ``values``. Entries
    are applied in order and the first matching entry wins for each key;
    values set by the file itself always win.
    """
    merged = dict(front_matter or {})
    for entry in defaults or ():
        if not _scope_matches(entry.get('scope') or {}, item_type, relative_path):
            continue
        for key, value in (entry.get('values') or {}).items():
            merged.setdefault(key, value)
    return merged
