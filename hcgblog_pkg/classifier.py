"""Classify content files by the configured directory they live in."""

import os

from .models import ItemType


def is_within(file_path, root):
    """True if ``file_path`` is ``root`` or lies below it."""
    file_path = os.path.normpath(file_path)
    root = os.path.normpath(root)
    if file_path == root:
        return True
    return file_path.startswith(root.rstrip(os.sep) + os.sep)


def classify_file(file_path, paths):
    """
    Map an absolute source path to an ItemType.

    Posts are checked first, then drafts (before pages, so a drafts folder
    nested inside the pages folder still yields drafts), then pages, then
    files sitting directly in the source root. Returns None when the file is
    outside every known content location.
    """
    if is_within(file_path, paths.posts):
        return ItemType.POST
    elif is_within(file_path, paths.drafts):
        return ItemType.DRAFT
    elif is_within(file_path, paths.pages):
        return ItemType.PAGE
    elif os.path.dirname(os.path.normpath(file_path)) == os.path.normpath(paths.source):
        return ItemType.PAGE
    return None
