"""
Find candidate content files under the configured content roots.
"""

import os

CONTENT_EXTENSIONS = ('.md', '.html')
IGNORED_DIRECTORIES = {'node_modules'}


def _is_ignored_directory(name):
    return name.startswith('.') or name.startswith('_') or name in IGNORED_DIRECTORIES


def _is_content_file(name):
    return not name.startswith('.') and name.lower().endswith(CONTENT_EXTENSIONS)


def walk_content_files(directory):
    """Recursively list content files below a directory."""
    files = []
    if not os.path.isdir(directory):
        return files
    for current_dir, dirnames, filenames in os.walk(directory):
        dirnames[:] = sorted(d for d in dirnames if not _is_ignored_directory(d))
        for filename in sorted(filenames):
            if _is_content_file(filename):
                files.append(os.path.join(current_dir, filename))
    return files


def get_root_content_files(directory):
    """List content files directly inside a directory (no recursion)."""
    files = []
    if os.path.isdir(directory):
        for filename in sorted(os.listdir(directory)):
            file_path = os.path.join(directory, filename)
            if _is_content_file(filename) and os.path.isfile(file_path):
                files.append(file_path)
    return files


def discover_content_files(paths):
    """
    Return the absolute paths of every candidate content file.

    Posts, pages and drafts are searched recursively; the source root only
    contributes the files sitting directly inside it. Dotfiles and
    directories starting with ``_`` or ``.`` are skipped.
    """
    found = []
    for root in (paths.posts, paths.pages, paths.drafts):
        found.extend(walk_content_files(root))
    found.extend(get_root_content_files(paths.source))

    seen = set()
    unique = []
    for file_path in found:
        file_path = os.path.abspath(file_path)
        if file_path not in seen:
            seen.add(file_path)
            unique.append(file_path)
    return sorted(unique)
