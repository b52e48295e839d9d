"""
Permalink and output path resolution.

Both functions are pure: the same inputs always produce the same result,
and neither touches the file system.
"""

import os
import posixpath
import re

from slugify import slugify

from .models import ItemType

DATE_PREFIX = re.compile(r'^\d{4}-\d{2}-\d{2}-')
MARKDOWN_EXTENSIONS = ('.md',)
POSTS_PREFIX = 'blog'
DRAFTS_PREFIX = 'drafts'


def _to_posix(path):
    return path.replace(os.sep, '/') if os.sep != '/' else path


def make_slug(relative_path, front_matter, item_type):
    """
    Build the slug for an item.

    An explicit ``slug`` in the front matter always wins. Otherwise posts
    drop a leading ``YYYY-MM-DD-`` from the file name, and everything else
    uses the file name as is.
    """
    explicit = front_matter.get('slug') if front_matter else None
    if explicit:
        return slugify(str(explicit))

    stem = posixpath.splitext(posixpath.basename(_to_posix(relative_path)))[0]
    if item_type == ItemType.POST:
        stem = DATE_PREFIX.sub('', stem)
    return slugify(stem)


def _page_segments(relative_path, pages_dir_name):
    """URL segments for a page's directory, slugified, without ``..`` parts."""
    directory = posixpath.dirname(_to_posix(relative_path))
    # A pages root outside the source root yields '../pages/...'.
    segments = [segment for segment in directory.split('/') if segment not in ('', '.', '..')]
    if pages_dir_name in segments:
        segments.remove(pages_dir_name)
    return [slug for slug in (slugify(segment) for segment in segments) if slug]


def resolve_permalink(relative_path, front_matter, item_type, pages_dir_name='pages'):
    """
    Compute the canonical URL path for a content item.

    Args:
        relative_path: Source path relative to the source root.
        front_matter: Normalized front matter mapping.
        item_type: ItemType of the item.
        pages_dir_name: Directory name of the pages root, removed from page URLs.

    Returns:
        An absolute URL path such as ``/blog/hello-world/`` or ``/``.

    Raises:
        ValueError: if neither the front matter nor the file name yields a
            non-empty slug.
    """
    slug = make_slug(relative_path, front_matter, item_type)
    if not slug:
        raise ValueError(f"Cannot derive a URL slug for '{relative_path}'; set 'slug' in the front matter.")

    if item_type == ItemType.POST:
        segments = [POSTS_PREFIX, slug]
    elif item_type == ItemType.DRAFT:
        segments = [DRAFTS_PREFIX, slug]
    else:
        segments = _page_segments(relative_path, pages_dir_name)
        if slug != 'index':
            segments.append(slug)

    permalink = re.sub(r'/{2,}', '/', '/' + '/'.join(segments))

    # Directory-style URL unless the source file has a literal non-markdown
    # extension (e.g. about.html -> /about).
    extension = posixpath.splitext(_to_posix(relative_path))[1].lower()
    wants_slash = slug == 'index' or extension in MARKDOWN_EXTENSIONS or extension == ''
    if permalink != '/' and wants_slash and not permalink.endswith('/'):
        permalink += '/'

    return permalink


def resolve_output_path(permalink, output_root):
    """
    Map a permalink to the absolute path of the file it is written to.

    Raises:
        ValueError: if the result would fall outside ``output_root``.
    """
    file_path = permalink
    if permalink.endswith('/'):
        file_path += 'index.html'
    elif not posixpath.splitext(file_path)[1]:
        file_path += '.html'

    relative_output_path = posixpath.normpath(file_path).lstrip('/')
    output_root = os.path.abspath(output_root)
    output_path = os.path.abspath(os.path.join(output_root, *relative_output_path.split('/')))
    if not output_path.startswith(output_root.rstrip(os.sep) + os.sep):
        raise ValueError(f"Output path for permalink '{permalink}' escapes the output directory.")
    return output_path
