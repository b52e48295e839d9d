#!/usr/bin/env python3
"""
Command-line interface for HcgBlog - content processing for static sites.
"""

import argparse
import logging
import os
import sys
from datetime import datetime

from . import __version__
from .core import ContentProcessor
from .exceptions import ConfigurationError
from .settings import SiteSettings

LOGGER_NAMES = ('ContentProcessor', 'ContentItemBuilder', 'SiteSettings')


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        if record.levelno >= logging.WARNING:
            return True
        allowed_messages = [
            "Loaded configuration from",
            "Found ",
            "Processed:",
            "Content processing completed in",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


def setup_logging(verbose=False, log_dir=None):
    """Set up logging configuration for the pipeline loggers."""
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not verbose:
        console_handler.addFilter(InfoFilter())
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    handlers = [console_handler]

    # File handler for all logs
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_filename = datetime.now().strftime('hcgblog_%Y-%m-%d_%H-%M-%S.log')
        file_handler = logging.FileHandler(os.path.join(log_dir, log_filename))
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        handlers.append(file_handler)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for handler in handlers:
            logger.addHandler(handler)
    return handlers


def print_summary(site_content, stream=None):
    """Print one line per post, page and draft."""
    stream = stream or sys.stdout

    print(f"\nFound {len(site_content.posts)} Posts:", file=stream)
    for post in site_content.posts:
        print(f"  - {post.permalink} (Date: {post.date.strftime('%Y-%m-%d')}, "
              f"Title: {post.front_matter.get('title', 'N/A')})", file=stream)

    print(f"\nFound {len(site_content.pages)} Pages:", file=stream)
    for page in site_content.pages:
        print(f"  - {page.permalink} (Source: {page.relative_path}, "
              f"Title: {page.front_matter.get('title', 'N/A')}, Type: {page.file_type.value})", file=stream)

    print(f"\nFound {len(site_content.drafts)} Drafts:", file=stream)
    for draft in site_content.drafts:
        print(f"  - {draft.permalink} (Source: {draft.relative_path}, "
              f"Title: {draft.front_matter.get('title', 'N/A')})", file=stream)

    print(f"\nWarnings: {len(site_content.warnings)}", file=stream)


def build_parser():
    parser = argparse.ArgumentParser(description='HcgBlog - content processing for static sites')
    parser.add_argument('--site', type=str, default=None,
                        help='Site directory containing the configuration file (default: current directory)')
    parser.add_argument('--config', type=str, default=None,
                        help='Configuration file name, relative to the site directory')
    parser.add_argument('--workers', type=int, default=None,
                        help='Maximum number of worker threads')
    parser.add_argument('--verbose', action='store_true',
                        help='Show every log message on the console')
    parser.add_argument('--no-log-file', action='store_true',
                        help='Do not write a log file to logs/')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    site_dir = os.path.abspath(args.site or os.getcwd())

    # Handle init command
    if args.init:
        settings_loader = SiteSettings(site_dir)
        config_path = settings_loader.create_sample_config(args.init)
        print(f"Created sample configuration file: {config_path}")
        return 0

    log_dir = None if args.no_log_file else os.path.join(os.getcwd(), 'logs')
    setup_logging(verbose=args.verbose, log_dir=log_dir)

    try:
        config = SiteSettings(site_dir).load_config(args.config)
        processor = ContentProcessor(config, max_workers=args.workers)
        site_content = processor.process()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_summary(site_content)
    return 0


if __name__ == '__main__':
    sys.exit(main())
