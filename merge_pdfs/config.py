"""
Merge configuration: properties file defaults, naming strategies and validation
"""

import os
import re
import logging
import configparser
from dataclasses import dataclass, field

from merge_pdfs.errors import ConfigurationError
from utils.filename_utils import ensure_extension

CONFIGURATION_FILE = 'MergingPDF.properties'

# Properties file keys
CONFIG_KEY_LOG_DEBUG = 'application.log.debug'
CONFIG_KEY_LOG_FILE = 'application.log.file'
CONFIG_KEY_DISPLAY_PROGRESS = 'application.display.progress'
CONFIG_KEY_INPUT_DIR = 'paths.input.directory'
CONFIG_KEY_INPUT_RECURSIVE_SEARCH = 'paths.input.recursive_search'
CONFIG_KEY_OUTPUT_DIR = 'paths.output.directory'
CONFIG_KEY_OUTPUT_LOG_NAME = 'output.log.name'
CONFIG_KEY_OUTPUT_PDF_NAME = 'output.pdf.name'
CONFIG_KEY_SPLIT_REGEX = 'output.pdf.id.split.regex'
CONFIG_KEY_SPLIT_INDEX = 'output.pdf.id.split.index'
CONFIG_KEY_EXTRACT_FROM = 'output.pdf.id.extract.from'
CONFIG_KEY_EXTRACT_LENGTH = 'output.pdf.id.extract.len'
CONFIG_KEY_OPTIMIZE_RESOURCES = 'merge.pdf.res.optimizing'

CONFIG_FLAG_TRUE = 'T'
CONFIG_FLAG_FALSE = 'F'

PDF_EXTENSION = '.pdf'
LOG_EXTENSION = '.log'
DEFAULT_LOG_NAME = 'merge.log'

_PROPERTIES_SECTION = 'properties'


@dataclass(frozen=True)
class ExplicitName:
    name: str


@dataclass(frozen=True)
class ExtractName:
    begin: int
    length: int


@dataclass(frozen=True)
class SplitName:
    regex: str
    index: int


@dataclass(frozen=True)
class DerivedFromInput:
    pass


@dataclass(frozen=True)
class MergeConfiguration:
    """Resolved configuration of one merge run"""
    input_directory: str
    output_directory: str = None
    recursive: bool = True
    optimize_resources: bool = False
    log_name: str = DEFAULT_LOG_NAME
    naming: object = field(default_factory=DerivedFromInput)
    display_progress: bool = False
    debug: bool = False

    @property
    def naming_is_derived(self):
        return isinstance(self.naming, DerivedFromInput)

    def describe(self):
        """key=value lines for debug logging"""
        return [
            f"input_directory={self.input_directory}",
            f"output_directory={self.output_directory or ''}",
            f"recursive={self.recursive}",
            f"optimize_resources={self.optimize_resources}",
            f"log_name={self.log_name or ''}",
            f"naming={self.naming}",
            f"display_progress={self.display_progress}",
            f"debug={self.debug}",
        ]


def load_properties(path):
    """
    Read a Java-style properties file ('key=value' lines, '#' or '!' comments).

    Values are taken literally (no backslash unescaping) and empty values are
    dropped, so they never override a built-in default.

    Args:
        path (str): Path to the properties file

    Returns:
        dict: key -> value
    """
    parser = configparser.ConfigParser(
        delimiters=('=', ':'),
        comment_prefixes=('#', '!'),
        interpolation=None,
        strict=False,
    )
    parser.optionxform = str
    with open(path, encoding='utf-8') as f:
        # Leading whitespace is insignificant in properties files but would
        # make configparser read the line as a continuation of the previous value.
        lines = [line.lstrip() for line in f.read().splitlines()]
    parser.read_string(f"[{_PROPERTIES_SECTION}]\n" + "\n".join(lines), source=path)
    properties = {}
    for key, value in parser.items(_PROPERTIES_SECTION):
        value = (value or '').strip()
        if value:
            properties[key] = value
    logging.debug(f"Loaded {len(properties)} properties from '{path}'")
    return properties


def find_properties_file(path=None):
    """Explicit path if given, else MergingPDF.properties in the working directory (or None)"""
    if path:
        if not os.path.isfile(path):
            raise ConfigurationError(f"Properties file '{path}' not found.")
        return path
    default_path = os.path.join(os.getcwd(), CONFIGURATION_FILE)
    return default_path if os.path.isfile(default_path) else None


def flag_property(properties, key, default):
    value = properties.get(key)
    if value is None:
        return default
    if value.upper() == CONFIG_FLAG_TRUE:
        return True
    if value.upper() == CONFIG_FLAG_FALSE:
        return False
    logging.warning(f"Property '{key}' should be '{CONFIG_FLAG_TRUE}' or '{CONFIG_FLAG_FALSE}', got '{value}'. Using default.")
    return default


def int_property(properties, key):
    value = properties.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(
            f"Property '{key}' within configuration file '{CONFIGURATION_FILE}' must be an integer : '{value}'."
        )


def select_naming_strategy(name=None, extract_begin=None, extract_length=None, split_regex=None, split_index=None):
    """
    Pick the output naming strategy: explicit name > extract > split > derived.

    Raises:
        ConfigurationError: when the selected strategy has invalid parameters
    """
    if name is not None:
        strategy = ExplicitName(name)
    elif extract_begin is not None:
        strategy = ExtractName(extract_begin, extract_length)
    elif split_regex is not None:
        strategy = SplitName(split_regex, split_index)
    else:
        strategy = DerivedFromInput()
    validate_naming(strategy)
    return strategy


def validate_naming(strategy):
    if isinstance(strategy, ExplicitName):
        if not strategy.name:
            raise ConfigurationError(
                f"Name for generated PDF is empty. Provide a name through command line or property '{CONFIG_KEY_OUTPUT_PDF_NAME}'."
            )
    elif isinstance(strategy, ExtractName):
        if strategy.begin is None or strategy.begin <= 0:
            raise ConfigurationError(
                "Name for generated PDF should be extracted from input file name but the provided start character is invalid. "
                f"It must be > 0. Provided value through command line or property '{CONFIG_KEY_EXTRACT_FROM}' : '{strategy.begin}'."
            )
        if strategy.length is None or strategy.length <= 0:
            raise ConfigurationError(
                "Name for generated PDF should be extracted from input file name but the provided length is invalid. "
                f"It must be > 0. Provided value through command line or property '{CONFIG_KEY_EXTRACT_LENGTH}' : '{strategy.length}'."
            )
    elif isinstance(strategy, SplitName):
        if not strategy.regex:
            raise ConfigurationError(
                "Name for generated PDF should be extracted from input file name using a regular expression "
                f"but no expression provided through command line or property '{CONFIG_KEY_SPLIT_REGEX}'."
            )
        try:
            re.compile(strategy.regex)
        except re.error as e:
            raise ConfigurationError(f"Invalid split regular expression '{strategy.regex}': {e}") from e
        if strategy.index is None or strategy.index <= 0:
            raise ConfigurationError(
                "Name for generated PDF should be extracted from input file name using a regular expression "
                f"but the provided index is invalid. It must be > 0. Provided value through command line or property '{CONFIG_KEY_SPLIT_INDEX}' : '{strategy.index}'."
            )
    elif not isinstance(strategy, DerivedFromInput):
        raise ConfigurationError(f"Unknown output naming strategy: {strategy!r}")


def build_configuration(args):
    """
    Build and validate a MergeConfiguration from parsed command line arguments.

    Args:
        args: argparse.Namespace produced by merge_pdfs.cli.build_parser

    Returns:
        MergeConfiguration

    Raises:
        ConfigurationError: on any invalid naming parameter (before any I/O)
    """
    if not args.input_directory:
        raise ConfigurationError(
            f"No input directory provided through command line or property '{CONFIG_KEY_INPUT_DIR}'."
        )
    naming = select_naming_strategy(
        name=args.pdf_name,
        extract_begin=args.extract_begin,
        extract_length=args.extract_size,
        split_regex=args.split_regex,
        split_index=args.split_index,
    )
    log_name = ensure_extension(args.log_name, LOG_EXTENSION) if args.log_name else None
    return MergeConfiguration(
        input_directory=args.input_directory,
        output_directory=args.output_directory or None,
        recursive=args.recursive,
        optimize_resources=args.optimize_resources,
        log_name=log_name,
        naming=naming,
        display_progress=args.display_progress,
        debug=args.debug,
    )
