#!/usr/bin/env python3
"""
Command line entry point: merge every PDF of a directory into one PDF

Defaults come from MergingPDF.properties (working directory or -c/--config);
command line flags override them.
"""

import argparse
import logging
import sys

from merge_pdfs.config import (
    CONFIGURATION_FILE, CONFIG_KEY_LOG_DEBUG, CONFIG_KEY_LOG_FILE, CONFIG_KEY_DISPLAY_PROGRESS,
    CONFIG_KEY_INPUT_DIR, CONFIG_KEY_INPUT_RECURSIVE_SEARCH, CONFIG_KEY_OUTPUT_DIR,
    CONFIG_KEY_OUTPUT_LOG_NAME, CONFIG_KEY_OUTPUT_PDF_NAME, CONFIG_KEY_SPLIT_REGEX,
    CONFIG_KEY_SPLIT_INDEX, CONFIG_KEY_EXTRACT_FROM, CONFIG_KEY_EXTRACT_LENGTH,
    CONFIG_KEY_OPTIMIZE_RESOURCES, DEFAULT_LOG_NAME,
    build_configuration, find_properties_file, flag_property, int_property, load_properties,
)
from merge_pdfs.errors import ConfigurationError
from merge_pdfs.merge import merge_directory
from utils.manage_output_dir import get_application_directory

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def _key_help(text, key):
    return f"{text} ({key} key in properties file '{CONFIGURATION_FILE}' can also be used.)"


def build_parser(properties=None):
    """Argument parser whose defaults come from the loaded properties"""
    properties = properties or {}
    parser = argparse.ArgumentParser(
        prog='mergepdf',
        description='Merge every PDF found in a directory into a single PDF file.',
    )
    parser.add_argument('-c', '--config', default=None,
                        help=f"Properties file with default configuration (default: ./{CONFIGURATION_FILE})")
    parser.add_argument('--debug', dest='debug', action='store_true',
                        default=flag_property(properties, CONFIG_KEY_LOG_DEBUG, False),
                        help=_key_help('Enable debug mode (by default OFF).', CONFIG_KEY_LOG_DEBUG))
    parser.add_argument('-f', '--forward', dest='display_progress', action='store_true',
                        default=flag_property(properties, CONFIG_KEY_DISPLAY_PROGRESS, False),
                        help=_key_help('Display progression on screen (by default OFF).', CONFIG_KEY_DISPLAY_PROGRESS))
    parser.add_argument('-d', '--depth', dest='recursive', action='store_false',
                        default=flag_property(properties, CONFIG_KEY_INPUT_RECURSIVE_SEARCH, True),
                        help=_key_help('Do not parse the input directory recursively (by default recursive).',
                                       CONFIG_KEY_INPUT_RECURSIVE_SEARCH))
    parser.add_argument('-z', '--optimizeres', dest='optimize_resources', action='store_true',
                        default=flag_property(properties, CONFIG_KEY_OPTIMIZE_RESOURCES, False),
                        help=_key_help('Optimize resources usage during merge: longer process, smaller PDF (by default OFF).',
                                       CONFIG_KEY_OPTIMIZE_RESOURCES))
    input_directory = properties.get(CONFIG_KEY_INPUT_DIR)
    parser.add_argument('-i', '--in', dest='input_directory', metavar='DIR',
                        default=input_directory, required=input_directory is None,
                        help=_key_help('Input directory with PDFs to be merged.', CONFIG_KEY_INPUT_DIR))
    parser.add_argument('-o', '--out', dest='output_directory', metavar='DIR',
                        default=properties.get(CONFIG_KEY_OUTPUT_DIR),
                        help=_key_help('Output directory (default: input directory).', CONFIG_KEY_OUTPUT_DIR))
    parser.add_argument('-l', '--log', dest='log_name', metavar='NAME',
                        default=properties.get(CONFIG_KEY_OUTPUT_LOG_NAME, DEFAULT_LOG_NAME),
                        help=_key_help("Name of the log file listing merged PDFs; an empty name derives it "
                                       "from the merged PDF name (default: %(default)s).", CONFIG_KEY_OUTPUT_LOG_NAME))
    parser.add_argument('-n', '--name', dest='pdf_name', metavar='NAME',
                        default=properties.get(CONFIG_KEY_OUTPUT_PDF_NAME),
                        help=_key_help('Name of the merged PDF (default: name of the first input PDF).',
                                       CONFIG_KEY_OUTPUT_PDF_NAME))
    parser.add_argument('-r', '--splitregex', dest='split_regex', metavar='REGEX',
                        default=properties.get(CONFIG_KEY_SPLIT_REGEX),
                        help=_key_help('Regular expression splitting the first input file name to build the merged PDF name.',
                                       CONFIG_KEY_SPLIT_REGEX))
    parser.add_argument('-p', '--splitpartpos', dest='split_index', metavar='N', type=int,
                        default=int_property(properties, CONFIG_KEY_SPLIT_INDEX),
                        help=_key_help('1-based position of the part kept after the split.', CONFIG_KEY_SPLIT_INDEX))
    parser.add_argument('-b', '--extractbegin', dest='extract_begin', metavar='N', type=int,
                        default=int_property(properties, CONFIG_KEY_EXTRACT_FROM),
                        help=_key_help('1-based index of the first character extracted from the first input file name.',
                                       CONFIG_KEY_EXTRACT_FROM))
    parser.add_argument('-s', '--extractsize', dest='extract_size', metavar='N', type=int,
                        default=int_property(properties, CONFIG_KEY_EXTRACT_LENGTH),
                        help=_key_help('Number of characters extracted from the first input file name.',
                                       CONFIG_KEY_EXTRACT_LENGTH))
    return parser


def configure_logging(debug=False, log_file=None):
    level = logging.DEBUG if debug else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    logging.getLogger().setLevel(level)


def configuration_error_message(error, properties, parser):
    lines = [
        "Error in configuration : command line arguments",
        "-----------------------------------------------",
        f"Error: {error}",
        "",
    ]
    if properties:
        lines.append(f"Default configuration loaded from {CONFIGURATION_FILE}:")
        lines.extend(f"\t{key}={value}" for key, value in properties.items())
        lines.append("")
    lines.append(parser.format_help())
    return "\n".join(lines)


def log_application_parameters(properties, argv):
    if properties:
        logging.debug(f"Default configuration from {CONFIGURATION_FILE}:")
        for key, value in properties.items():
            logging.debug(f"{key}={value}")
    logging.debug(f"Command line arguments : {' '.join(argv)}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else list(argv)

    config_parser = argparse.ArgumentParser(add_help=False)
    config_parser.add_argument('-c', '--config', default=None)
    known, _ = config_parser.parse_known_args(argv)
    properties = {}
    try:
        properties_file = find_properties_file(known.config)
        if properties_file:
            properties = load_properties(properties_file)
        parser = build_parser(properties)
    except ConfigurationError as e:
        print(configuration_error_message(e, properties, build_parser()), file=sys.stderr)
        return 1
    args = parser.parse_args(argv)

    configure_logging(args.debug, properties.get(CONFIG_KEY_LOG_FILE))
    logging.info(f"Python version : {sys.version.split()[0]}")
    logging.info(f"Application directory : {get_application_directory()}")
    if properties_file:
        logging.info(f"Properties file '{properties_file}' found. Reading default configuration...")
    else:
        logging.info(f"No properties file '{CONFIGURATION_FILE}' found. Internal default configuration used.")

    logging.info("Loading configuration...")
    try:
        config = build_configuration(args)
    except ConfigurationError as e:
        message = configuration_error_message(e, properties, parser)
        logging.error(message)
        print(message, file=sys.stderr)
        return 1
    logging.info("Configuration loaded.")
    if config.debug:
        log_application_parameters(properties, argv)
        for line in config.describe():
            logging.debug(line)

    return 0 if merge_directory(config) else 1


if __name__ == "__main__":
    sys.exit(main())
