"""
HcgBlog - content ingestion for static sites.

HcgBlog reads a tree of Markdown and HTML files with YAML front matter,
classifies them into posts, pages and drafts, resolves permalinks and output
paths, and returns a sorted SiteContent ready for template rendering.
"""

__version__ = "1.0.0"

from .core import ContentItemBuilder, ContentProcessor, process_content
from .models import ContentItem, FileType, ItemType, Page, Post, SiteContent
from .settings import SiteConfig, SitePaths, SiteSettings, load_config
from .exceptions import ConfigurationError, ContentParseError

__all__ = [
    'ContentItemBuilder', 'ContentProcessor', 'process_content',
    'ContentItem', 'FileType', 'ItemType', 'Page', 'Post', 'SiteContent',
    'SiteConfig', 'SitePaths', 'SiteSettings', 'load_config',
    'ConfigurationError', 'ContentParseError',
]
