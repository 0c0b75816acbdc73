"""helpman - generate manual pages from ``-help`` output.

The core is importable on its own:

    PatternReplacer   ordered single-pass regex replacement
    extract_help      help text -> HelpRecord
    split_sections    include file -> IncludeSet
    render_manpage    HelpRecord (+ IncludeSet) -> roff
"""

from helpman._version import __version__, __app_name__
from helpman.errors import (
    HelpmanError, ReplacerError, HelpParseError, IncludeParseError,
    HelpCaptureError, RenderError, SourceDateEpochError,
)
from helpman.replacer import PatternReplacer
from helpman.helptext import Flag, HelpRecord, HelpExtractor, extract_help
from helpman.include import Section, IncludeSet, SectionSplitter, split_sections
from helpman.manpage import render_manpage

__all__ = [
    "__version__", "__app_name__",
    "HelpmanError", "ReplacerError", "HelpParseError", "IncludeParseError",
    "HelpCaptureError", "RenderError", "SourceDateEpochError",
    "PatternReplacer",
    "Flag", "HelpRecord", "HelpExtractor", "extract_help",
    "Section", "IncludeSet", "SectionSplitter", "split_sections",
    "render_manpage",
]
