"""
Content models produced by the HcgBlog content pipeline.

A ContentItem is built once per run from a single source file. Posts and
Pages are constructed directly as their own types once every field they
require is known; drafts stay plain ContentItems.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List


class FileType(str, Enum):
    """Source format of a content file."""
    MARKDOWN = 'markdown'
    HTML = 'html'


class ItemType(str, Enum):
    """Classification of a content file by the directory it lives in."""
    POST = 'post'
    DRAFT = 'draft'
    PAGE = 'page'


@dataclass(kw_only=True)
class ContentItem:
    """A processed source file (page, post or draft)."""
    id: str
    source_path: str
    relative_path: str
    file_type: FileType
    is_draft: bool
    front_matter: Dict[str, Any]
    raw_content: str
    html_content: str
    permalink: str
    output_path: str
    # Relative link, filled in by the rendering stage.
    output_href: str = ''

    @property
    def title(self):
        return self.front_matter.get('title')


@dataclass(kw_only=True)
class Post(ContentItem):
    """A blog post. Always carries a valid publication date."""
    date: datetime

    def __post_init__(self):
        if not isinstance(self.date, datetime):
            raise TypeError(f"Post {self.id} requires a datetime date, got {self.date!r}")


@dataclass(kw_only=True)
class Page(ContentItem):
    """A standalone page."""


@dataclass
class SiteContent:
    """All processed content, ready for rendering."""
    posts: List[Post] = field(default_factory=list)
    pages: List[Page] = field(default_factory=list)
    drafts: List[ContentItem] = field(default_factory=list)
    diagnostics: list = field(default_factory=list)

    def all_items(self):
        """Return every item across the three collections."""
        return [*self.posts, *self.pages, *self.drafts]

    @property
    def warnings(self):
        return [d for d in self.diagnostics if d.level != 'info']
