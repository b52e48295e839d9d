"""Tests for permalink and output path resolution."""

import os
import re

import pytest

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from hcgblog_pkg.models import ItemType
from hcgblog_pkg.permalinks import make_slug, resolve_output_path, resolve_permalink

DIRECTORY_URL = re.compile(r'^/([a-z0-9-]+/)*$')


class TestMakeSlug:
    """Test cases for slug derivation."""

    def test_post_date_prefix_is_stripped(self):
        assert make_slug('posts/2024-01-15-hello-world.md', {}, ItemType.POST) == 'hello-world'

    def test_page_keeps_date_like_prefix(self):
        assert make_slug('pages/2024-01-15-changelog.md', {}, ItemType.PAGE) == '2024-01-15-changelog'

    def test_front_matter_slug_overrides_date_stripping(self):
        slug = make_slug('posts/2024-01-15-hello-world.md', {'slug': '2023-12-31-Year End'}, ItemType.POST)
        assert slug == '2023-12-31-year-end'

    def test_slug_is_url_safe(self):
        assert make_slug('pages/x.md', {'slug': 'Café  Déjà   Vu!!'}, ItemType.PAGE) == 'cafe-deja-vu'

    def test_empty_front_matter_slug_falls_back_to_filename(self):
        assert make_slug('pages/About Us.md', {'slug': ''}, ItemType.PAGE) == 'about-us'


class TestResolvePermalink:
    """Test cases for resolve_permalink."""

    def test_post(self):
        permalink = resolve_permalink('posts/2024-01-15-hello-world.md', {}, ItemType.POST)
        assert permalink == '/blog/hello-world/'

    def test_post_in_subdirectory_is_flattened(self):
        permalink = resolve_permalink('posts/2024/2024-02-02-nested.md', {}, ItemType.POST)
        assert permalink == '/blog/nested/'

    def test_post_with_explicit_slug(self):
        permalink = resolve_permalink('posts/2024-01-15-hello-world.md', {'slug': 'Greetings'}, ItemType.POST)
        assert permalink == '/blog/greetings/'

    def test_draft(self):
        assert resolve_permalink('drafts/My Next Post.md', {}, ItemType.DRAFT) == '/drafts/my-next-post/'

    def test_page(self):
        assert resolve_permalink('pages/about.md', {}, ItemType.PAGE) == '/about/'

    def test_page_directory_index(self):
        assert resolve_permalink('pages/projects/index.md', {}, ItemType.PAGE) == '/projects/'

    def test_nested_page_keeps_intermediate_segments(self):
        permalink = resolve_permalink('pages/docs/guides/setup.md', {}, ItemType.PAGE)
        assert permalink == '/docs/guides/setup/'

    def test_root_index_is_site_root(self):
        assert resolve_permalink('index.md', {}, ItemType.PAGE) == '/'

    def test_pages_index_is_site_root(self):
        assert resolve_permalink('pages/index.md', {}, ItemType.PAGE) == '/'

    def test_root_level_page(self):
        assert resolve_permalink('about.md', {}, ItemType.PAGE) == '/about/'

    def test_custom_pages_directory_name(self):
        permalink = resolve_permalink('site-pages/team/alice.md', {}, ItemType.PAGE, pages_dir_name='site-pages')
        assert permalink == '/team/alice/'

    def test_only_one_pages_component_is_removed(self):
        assert resolve_permalink('pages/pages/x.md', {}, ItemType.PAGE) == '/pages/x/'

    def test_pages_root_outside_source_root(self):
        assert resolve_permalink('../pages/about.md', {}, ItemType.PAGE) == '/about/'
        assert resolve_permalink('../../content/pages/docs/a.md', {}, ItemType.PAGE) == '/content/docs/a/'

    def test_directory_segments_are_slugified(self):
        assert resolve_permalink('pages/My Docs/Intro.md', {}, ItemType.PAGE) == '/my-docs/intro/'
        assert resolve_permalink('pages/!!!/x.md', {}, ItemType.PAGE) == '/x/'

    def test_empty_slug_raises(self):
        with pytest.raises(ValueError, match="slug"):
            resolve_permalink('pages/!!!.md', {}, ItemType.PAGE)
        with pytest.raises(ValueError):
            resolve_permalink('posts/2024-01-01-.md', {}, ItemType.POST)

    def test_html_page_keeps_literal_path(self):
        assert resolve_permalink('pages/contact.html', {}, ItemType.PAGE) == '/contact'

    def test_html_page_with_slug_keeps_literal_path(self):
        permalink = resolve_permalink('pages/contact.html', {'slug': 'Get in Touch'}, ItemType.PAGE)
        assert permalink == '/get-in-touch'

    def test_html_index_is_directory_url(self):
        assert resolve_permalink('pages/projects/index.html', {}, ItemType.PAGE) == '/projects/'

    def test_uppercase_markdown_extension(self):
        assert resolve_permalink('pages/Guide.MD', {}, ItemType.PAGE) == '/guide/'

    def test_source_without_extension(self):
        assert resolve_permalink('pages/readme', {}, ItemType.PAGE) == '/readme/'

    def test_front_matter_slug_index_makes_directory_index(self):
        permalink = resolve_permalink('pages/docs/overview.md', {'slug': 'index'}, ItemType.PAGE)
        assert permalink == '/docs/'

    def test_resolution_is_pure(self):
        front_matter = {'slug': 'Same Every Time'}
        first = resolve_permalink('posts/2024-01-15-a.md', front_matter, ItemType.POST)
        second = resolve_permalink('posts/2024-01-15-a.md', front_matter, ItemType.POST)
        assert first == second == '/blog/same-every-time/'
        assert front_matter == {'slug': 'Same Every Time'}

    def test_markdown_permalinks_are_directory_urls(self):
        cases = [
            ('posts/2024-01-15-hello-world.md', ItemType.POST),
            ('posts/Weird___Name!!.md', ItemType.POST),
            ('drafts/draft.md', ItemType.DRAFT),
            ('pages/a/b/c.md', ItemType.PAGE),
            ('pages/My Docs/Intro Page.md', ItemType.PAGE),
            ('../pages/about.md', ItemType.PAGE),
            ('pages/index.md', ItemType.PAGE),
            ('index.md', ItemType.PAGE),
        ]
        for relative_path, item_type in cases:
            permalink = resolve_permalink(relative_path, {}, item_type)
            assert permalink.startswith('/')
            assert permalink == '/' or DIRECTORY_URL.match(permalink), permalink


class TestResolveOutputPath:
    """Test cases for resolve_output_path."""

    def test_root(self, temp_dir):
        assert resolve_output_path('/', temp_dir) == os.path.join(temp_dir, 'index.html')

    def test_directory_permalink(self, temp_dir):
        output_path = resolve_output_path('/blog/hello-world/', temp_dir)
        assert output_path == os.path.join(temp_dir, 'blog', 'hello-world', 'index.html')

    def test_literal_permalink_gets_html_extension(self, temp_dir):
        assert resolve_output_path('/contact', temp_dir) == os.path.join(temp_dir, 'contact.html')

    def test_permalink_with_extension_is_unchanged(self, temp_dir):
        assert resolve_output_path('/feeds/atom.xml', temp_dir) == os.path.join(temp_dir, 'feeds', 'atom.xml')

    def test_output_path_is_absolute(self, temp_dir):
        output_path = resolve_output_path('/docs/guides/', os.path.join(temp_dir, 'out', '..', 'out'))
        assert os.path.isabs(output_path)
        assert output_path == os.path.join(temp_dir, 'out', 'docs', 'guides', 'index.html')

    def test_parent_segments_stay_inside_output_root(self, temp_dir):
        output_path = resolve_output_path('/../../about/', temp_dir)
        assert output_path == os.path.join(temp_dir, 'about', 'index.html')

    def test_escaping_output_root_raises(self, temp_dir):
        with pytest.raises(ValueError, match="escapes"):
            resolve_output_path('../elsewhere/', os.path.join(temp_dir, 'out'))
