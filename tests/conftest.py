"""Test configuration and fixtures for HcgBlog tests."""

import pytest
import tempfile
import shutil
import os
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from hcgblog_pkg.settings import SiteConfig, SitePaths


def write_file(path, content):
    """Write a text file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')
    return str(path)


def make_config(source_dir, **overrides):
    """Build a SiteConfig whose content roots sit under ``source_dir``."""
    source_dir = str(source_dir)
    paths = {
        'source': source_dir,
        'output': os.path.join(source_dir, 'output'),
        'posts': os.path.join(source_dir, 'posts'),
        'pages': os.path.join(source_dir, 'pages'),
        'drafts': os.path.join(source_dir, 'drafts'),
        'layouts': os.path.join(source_dir, 'layouts'),
        'includes': os.path.join(source_dir, 'includes'),
        'assets': os.path.join(source_dir, 'assets'),
    }
    paths.update(overrides.pop('paths', {}))
    return SiteConfig(
        title=overrides.pop('title', 'Test Site'),
        base_url=overrides.pop('base_url', 'https://example.com'),
        paths=SitePaths(**paths),
        **overrides
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield os.path.realpath(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def site_dir(temp_dir):
    """Create a site source tree with posts, pages and drafts."""
    site = Path(temp_dir) / 'site'

    write_file(site / 'posts' / '2024-01-15-hello-world.md', """---
title: Hello World
date: 2024-01-15
tags: python
categories: [1, news]
---

# Hello World

First post.
""")

    write_file(site / 'posts' / '2024-03-01-second-post.md', """---
title: Second Post
date: "2024-03-01T09:30:00"
---

The second post.
""")

    write_file(site / 'posts' / 'no-date.md', """---
title: Missing Date
---

A post without a date.
""")

    write_file(site / 'posts' / 'bad-date.md', """---
title: Bad Date
date: sometime last week
---

A post with an invalid date.
""")

    write_file(site / 'pages' / 'about.md', """---
title: About
---

# About Page
""")

    write_file(site / 'pages' / 'projects' / 'index.md', """---
title: Projects
---

All projects.
""")

    write_file(site / 'pages' / 'hidden.md', """---
title: Hidden
published: false
---

Not published.
""")

    write_file(site / 'pages' / 'contact.html', "<h1>Contact</h1>\n")

    write_file(site / 'pages' / '_partials' / 'snippet.md', "Partial content.\n")
    write_file(site / 'pages' / '.secret.md', "Dotfile content.\n")
    write_file(site / 'pages' / 'notes.txt', "Not content.\n")

    write_file(site / 'drafts' / 'upcoming.md', """---
title: Upcoming
published: false
---

Work in progress.
""")

    write_file(site / 'index.md', """---
title: Home
---

Welcome.
""")

    write_file(site / 'misc' / 'stray.md', "Outside every content root.\n")

    return str(site)


@pytest.fixture
def site_config(site_dir):
    """SiteConfig for the sample site."""
    return make_config(site_dir)
