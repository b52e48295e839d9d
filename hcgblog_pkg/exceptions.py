"""Exceptions raised by HcgBlog."""


class HcgBlogError(Exception):
    """Base class for HcgBlog errors."""


class ConfigurationError(HcgBlogError):
    """The site configuration is unreadable, unparseable or incomplete. Always fatal."""


class ContentParseError(HcgBlogError, ValueError):
    """A single content file could not be parsed. The file is skipped."""
