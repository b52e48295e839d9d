"""Partition built items into posts, pages and drafts, and sort each collection."""

from datetime import timezone

from .models import Post, SiteContent


def post_sort_key(post):
    """Sort key for post dates; aware datetimes are compared in UTC."""
    date = post.date
    if date.tzinfo is not None and date.utcoffset() is not None:
        date = date.astimezone(timezone.utc).replace(tzinfo=None)
    return date


def assemble_site_content(items, diagnostics=()):
    """
    Build the SiteContent for a run.

    Items must be given in discovery order: posts that share a date keep
    that order. Drafts are recognized by ``is_draft`` whatever their type.
    """
    posts = []
    pages = []
    drafts = []
    for item in items:
        if item is None:
            continue
        if item.is_draft:
            drafts.append(item)
        elif isinstance(item, Post):
            posts.append(item)
        else:
            pages.append(item)

    # sorted() is stable, reverse=True included
    posts = sorted(posts, key=post_sort_key, reverse=True)
    pages = sorted(pages, key=lambda page: page.permalink)
    drafts = sorted(drafts, key=lambda draft: draft.permalink)

    return SiteContent(posts=posts, pages=pages, drafts=drafts, diagnostics=list(diagnostics))
