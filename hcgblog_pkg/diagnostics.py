"""
Diagnostics sink for recoverable problems found while processing content.

Builders record warnings here instead of printing them, so a run returns its
warnings alongside the SiteContent. Every recorded message is also forwarded
to a standard logger.
"""

import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class Diagnostic:
    level: str
    source: str
    message: str

    def __str__(self):
        if self.source:
            return f"[{self.level.upper()}] {self.source}: {self.message}"
        return f"[{self.level.upper()}] {self.message}"


class DiagnosticCollector:
    """Collect diagnostics and forward them to a logger."""

    LEVELS = {
        'info': logging.INFO,
        'warning': logging.WARNING,
        'error': logging.ERROR,
    }

    def __init__(self, logger=None):
        self.logger = logger or logging.getLogger('ContentProcessor')
        self.diagnostics = []

    def record(self, level, source, message):
        diagnostic = Diagnostic(level, source, message)
        self.diagnostics.append(diagnostic)
        self.logger.log(self.LEVELS.get(level, logging.WARNING), str(diagnostic))
        return diagnostic

    def info(self, source, message):
        return self.record('info', source, message)

    def warning(self, source, message):
        return self.record('warning', source, message)

    def error(self, source, message):
        return self.record('error', source, message)

    def extend(self, diagnostics):
        """Append diagnostics already logged elsewhere (e.g. by a worker)."""
        self.diagnostics.extend(diagnostics)

    @property
    def warnings(self):
        return [d for d in self.diagnostics if d.level != 'info']

    def __len__(self):
        return len(self.diagnostics)

    def __iter__(self):
        return iter(self.diagnostics)
