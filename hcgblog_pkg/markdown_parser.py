"""
Markdown source parsing: YAML front matter plus a mistune HTML render.
"""

import re
from collections import namedtuple

import mistune
import yaml

from .exceptions import ContentParseError

FRONT_MATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$\n?', re.DOTALL | re.MULTILINE)

ParsedMarkdown = namedtuple('ParsedMarkdown', ['front_matter', 'raw_content', 'html_content'])


def create_markdown_parser():
    """Create a Mistune markdown parser with a custom renderer."""
    class CustomRenderer(mistune.HTMLRenderer):
        def __init__(self):
            super().__init__(escape=False)

        def block_code(self, code, info=None):
            escaped_code = mistune.escape(code)
            if info:
                lang = mistune.escape(info.strip().split(None, 1)[0])
                return '<pre><code class="language-{}">{}</code></pre>\n'.format(lang, escaped_code)
            return '<pre><code>{}</code></pre>\n'.format(escaped_code)

    return mistune.create_markdown(
        renderer=CustomRenderer(),
        plugins=['table', 'task_lists', 'strikethrough']
    )


def split_front_matter(text, source=''):
    """
    Split a source text into its front matter mapping and body.

    Front matter is a YAML block opened and closed by ``---`` lines at the
    very top of the file. Text without such a block has empty front matter.
    The body is returned exactly as it follows the closing delimiter.
    """
    text = text.lstrip('\ufeff')
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        metadata = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise ContentParseError(f"Invalid YAML front matter in {source}: {e}") from e

    if metadata is None:
        metadata = {}
    elif not isinstance(metadata, dict):
        raise ContentParseError(
            f"Front matter in {source} must be a mapping, got {type(metadata).__name__}"
        )

    return {str(key): value for key, value in metadata.items()}, text[match.end():]


class MarkdownFileParser:
    """Read a Markdown file and render it. Holds one mistune instance."""

    def __init__(self):
        self.markdown_parser = create_markdown_parser()

    def markdown_filter(self, text):
        """Convert markdown text to HTML."""
        return self.markdown_parser(text)

    def __call__(self, filepath):
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
        front_matter, markdown_content = split_front_matter(content, filepath)
        return ParsedMarkdown(front_matter, markdown_content, self.markdown_filter(markdown_content))


def parse_markdown_file(filepath):
    """Parse a markdown file with YAML front matter and render its body to HTML."""
    return MarkdownFileParser()(filepath)
