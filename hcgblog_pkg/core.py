import os
import logging
import threading
import time
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from .assembler import assemble_site_content
from .classifier import classify_file
from .diagnostics import DiagnosticCollector
from .discovery import discover_content_files
from .frontmatter import apply_front_matter_defaults, normalize_front_matter
from .markdown_parser import MarkdownFileParser
from .models import ContentItem, FileType, ItemType, Page, Post
from .permalinks import resolve_output_path, resolve_permalink

FILE_TYPES = {
    '.md': FileType.MARKDOWN,
    '.html': FileType.HTML,
}

# Below this many files the thread pool costs more than it saves.
PARALLEL_THRESHOLD = 12

BuildResult = namedtuple('BuildResult', ['item', 'diagnostics'])

# Thread-local storage for ContentItemBuilder instances
thread_local = threading.local()


def default_max_workers():
    """Worker count bounded so a large site cannot exhaust file descriptors."""
    return min(32, (os.cpu_count() or 1) + 4)


def initializer(config, markdown_parser=None):
    """Initialize a ContentItemBuilder in thread-local storage for each worker thread."""
    thread_local.builder = ContentItemBuilder(config, markdown_parser=markdown_parser)


def process_file(file_path):
    """Build a single file with the calling worker's builder."""
    return thread_local.builder.build(file_path)


class ContentItemBuilder:
    def __init__(self, config, markdown_parser=None):
        self.config = config
        self.paths = config.paths
        self.markdown_parser = markdown_parser or MarkdownFileParser()
        self.logger = logging.getLogger('ContentItemBuilder')

    def relative_path(self, file_path):
        """Source-relative path with forward slashes; used as the item id."""
        return os.path.relpath(file_path, self.paths.source).replace(os.sep, '/')

    def read_source(self, file_path, file_type):
        """Return (front_matter, raw_content, html_content) for a source file."""
        if file_type == FileType.MARKDOWN:
            parsed = self.markdown_parser(file_path)
            return parsed.front_matter, parsed.raw_content, parsed.html_content

        with open(file_path, 'r', encoding='utf-8') as f:
            raw_content = f.read()
        # HTML passes through untouched and carries no front matter.
        return {}, raw_content, raw_content

    def build(self, file_path):
        """
        Build the content item for one source file.

        Returns a BuildResult. ``item`` is None when the file was skipped;
        the reason is in ``diagnostics``. Nothing raised while reading or
        parsing one file escapes this method.
        """
        diagnostics = DiagnosticCollector(self.logger)
        file_path = os.path.abspath(file_path)
        relative_path = self.relative_path(file_path)

        item_type = classify_file(file_path, self.paths)
        if item_type is None:
            diagnostics.warning(relative_path, "File found outside known content directories, skipping.")
            return BuildResult(None, diagnostics.diagnostics)

        extension = os.path.splitext(file_path)[1].lower()
        file_type = FILE_TYPES.get(extension)
        if file_type is None:
            diagnostics.warning(relative_path, f"Skipping unsupported file type '{extension or '(none)'}'.")
            return BuildResult(None, diagnostics.diagnostics)

        try:
            item = self._build_item(file_path, relative_path, item_type, file_type, diagnostics)
        except (IOError, OSError, UnicodeDecodeError, ValueError) as e:
            diagnostics.error(relative_path, f"Failed to process file: {e}")
            item = None
        except Exception as e:
            # A collaborator (e.g. a custom markdown parser) failed on this file only.
            diagnostics.error(relative_path, f"Unexpected error processing file: {e}")
            item = None
        return BuildResult(item, diagnostics.diagnostics)

    def _build_item(self, file_path, relative_path, item_type, file_type, diagnostics):
        is_draft = item_type == ItemType.DRAFT

        raw_front_matter, raw_content, html_content = self.read_source(file_path, file_type)
        raw_front_matter = apply_front_matter_defaults(
            raw_front_matter, self.config.front_matter_defaults, item_type, relative_path
        )
        front_matter = normalize_front_matter(raw_front_matter, diagnostics, relative_path)

        # Drafts are never filtered by the published flag.
        if front_matter.get('published') is False and not is_draft:
            diagnostics.info(relative_path, "Skipping unpublished item.")
            return None

        permalink = resolve_permalink(relative_path, front_matter, item_type, self.paths.pages_dir_name)
        output_path = resolve_output_path(permalink, self.paths.output)

        fields = dict(
            id=relative_path,
            source_path=file_path,
            relative_path=relative_path,
            file_type=file_type,
            is_draft=is_draft,
            front_matter=front_matter,
            raw_content=raw_content,
            html_content=html_content,
            permalink=permalink,
            output_path=output_path,
        )

        if item_type == ItemType.POST:
            if front_matter.get('date') is None:
                diagnostics.warning(relative_path, "Skipping post due to missing or invalid date.")
                return None
            return Post(date=front_matter['date'], **fields)
        elif item_type == ItemType.DRAFT:
            return ContentItem(**fields)
        return Page(**fields)


class ContentProcessor:
    """Run the content pipeline for a site: discover, build, assemble."""

    def __init__(self, config, markdown_parser=None, max_workers=None, parallel_threshold=PARALLEL_THRESHOLD,
                 discover=discover_content_files):
        self.config = config
        self.markdown_parser = markdown_parser
        self.max_workers = max_workers or default_max_workers()
        self.parallel_threshold = parallel_threshold
        self.discover = discover
        self.logger = logging.getLogger('ContentProcessor')

    def process(self, files=None):
        """
        Process every content file and return the SiteContent.

        Args:
            files: Absolute file paths to process. Defaults to the files found
                by discovery under the configured roots.
        """
        start_time = time.time()
        self.logger.info("Starting content processing...")

        if files is None:
            files = self.discover(self.config.paths)
        files, duplicates = self._unique_files(files)
        self.logger.info(f"Found {len(files)} potential content files.")

        if len(files) >= self.parallel_threshold and self.max_workers > 1:
            self.logger.info(f"Using {self.max_workers} worker threads for {len(files)} files")
            results = self._build_with_thread_pool(files)
        else:
            self.logger.info(f"Using single-threaded processing for {len(files)} files")
            results = self._build_single_threaded(files)

        items = []
        diagnostics = DiagnosticCollector(self.logger)
        diagnostics.extend(duplicates)
        for result in results:
            diagnostics.extend(result.diagnostics)
            if result.item is not None:
                items.append(result.item)

        site_content = assemble_site_content(items, diagnostics.diagnostics)

        self.logger.info(
            f"Processed: {len(site_content.posts)} posts, {len(site_content.pages)} pages, "
            f"{len(site_content.drafts)} drafts."
        )
        self.logger.info(f"Content processing completed in {time.time() - start_time:.6f} seconds.")
        return site_content

    def _unique_files(self, files):
        """Drop repeated paths so every item id stays unique within the run."""
        collector = DiagnosticCollector(self.logger)
        seen = set()
        unique = []
        for file_path in files:
            file_path = os.path.abspath(file_path)
            if file_path in seen:
                collector.warning(file_path, "Duplicate file in input list, skipping.")
                continue
            seen.add(file_path)
            unique.append(file_path)
        return unique, collector.diagnostics

    def _build_single_threaded(self, files):
        """Build items one after another for small workloads."""
        builder = ContentItemBuilder(self.config, markdown_parser=self.markdown_parser)
        return [builder.build(file_path) for file_path in files]

    def _build_with_thread_pool(self, files):
        """Build items on a bounded thread pool; results come back in input order."""
        with ThreadPoolExecutor(
            max_workers=self.max_workers,
            initializer=initializer,
            initargs=(self.config, self.markdown_parser)
        ) as executor:
            return list(executor.map(process_file, files))


def process_content(config, files=None, **kwargs):
    """Shortcut for ``ContentProcessor(config, **kwargs).process(files)``."""
    return ContentProcessor(config, **kwargs).process(files)
