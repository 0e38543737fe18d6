"""grab-input - Resolve a command-line argument into stdin, a file or literal text.

A single argument can mean three things:
- "-": read from standard input
- "@path/to/file": read from a file
- anything else: use the argument itself

Usage:
    from grab_input import Input

    name = Input.with_defaults(arg).access().read_to_string()

    # Custom markers and priorities
    from grab_input import Builder, FileParser, StdinParser

    config = (
        Builder()
        .file(FileParser(marker="file://", weight=10))
        .stdin(StdinParser(marker="<stdin>"))
        .text()
        .build()
    )
    source = config.parse_str("file://notes.txt")

Settings (JSON, see grab_input.settings):
    {"file": {"marker": "@"}, "stdin": {"marker": "-"}, "text": {}}
"""

from grab_input.builder import Builder, Config
from grab_input.errors import (
    AccessError,
    AccessKind,
    ErrorKind,
    GrabError,
    InputError,
    RegistryError,
    SettingsError,
)
from grab_input.input import Input, InputReader
from grab_input.models import FileSource, ResolvedSource, StdinSource, TextSource, dump_source, load_source
from grab_input.parsers import (
    FileParser,
    Matcher,
    ParserUnit,
    StdinParser,
    TextParser,
    exact_matcher,
    prefix_matcher,
)
from grab_input.settings import (
    builder_from_settings,
    load_settings,
    save_settings,
    settings_from_builder,
    settings_schema,
    validate_settings,
)

__all__ = [
    # Dispatch
    "Builder",
    "Config",
    "Input",
    "InputReader",
    # Parsers
    "ParserUnit",
    "FileParser",
    "StdinParser",
    "TextParser",
    "Matcher",
    "prefix_matcher",
    "exact_matcher",
    # Sources
    "ResolvedSource",
    "StdinSource",
    "FileSource",
    "TextSource",
    "dump_source",
    "load_source",
    # Errors
    "GrabError",
    "InputError",
    "ErrorKind",
    "AccessError",
    "AccessKind",
    "RegistryError",
    "SettingsError",
    # Settings
    "settings_schema",
    "validate_settings",
    "builder_from_settings",
    "settings_from_builder",
    "load_settings",
    "save_settings",
]
__version__ = "0.1.0"
