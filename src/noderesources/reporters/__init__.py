from .base_reporter import BaseReporter
from .console_reporter import ConsoleReporter
from .html_reporter import HTMLReporter

__all__ = ["BaseReporter", "ConsoleReporter", "HTMLReporter"]
