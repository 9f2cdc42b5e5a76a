"""
Output file naming for a merge run
"""

import os
import re
import logging
from dataclasses import dataclass

from merge_pdfs.config import (
    ExplicitName, ExtractName, SplitName, DerivedFromInput,
    PDF_EXTENSION, LOG_EXTENSION, validate_naming,
)
from merge_pdfs.errors import ConfigurationError
from utils.filename_utils import ensure_extension, strip_extension


@dataclass(frozen=True)
class OutputNamingDecision:
    output_pdf: str
    log_path: str


def split_file_name(file_name, regex):
    """Split a name on a regular expression, dropping trailing empty parts"""
    parts = re.split(regex, file_name)
    while parts and parts[-1] == '':
        parts.pop()
    return parts


def resolve_pdf_name(input_file_name, naming):
    """
    Build the merged PDF file name from the first input file name.

    Args:
        input_file_name (str): Base name of the first input, e.g. 'invoice123.pdf'
        naming: One of ExplicitName, ExtractName, SplitName, DerivedFromInput

    Returns:
        str: Output file name, always ending with '.pdf'
    """
    validate_naming(naming)
    if isinstance(naming, ExplicitName):
        pdf_name = naming.name
    elif isinstance(naming, ExtractName):
        if naming.begin > len(input_file_name):
            raise ConfigurationError(
                f"Merged PDF file name should be built with an extract of input file name that starts at character "
                f"'{naming.begin}'. This index is outside the limit of PDF file name '{len(input_file_name)}'."
            )
        start = naming.begin - 1
        pdf_name = input_file_name[start:start + naming.length]
    elif isinstance(naming, SplitName):
        parts = split_file_name(input_file_name, naming.regex)
        if naming.index > len(parts):
            raise ConfigurationError(
                f"Merged PDF file name should be built according to a split based on regular expression "
                f"'{naming.regex}' and by extracting part found at index '{naming.index}'. "
                f"This index is out of bounds : 1 -> {len(parts)}."
            )
        pdf_name = parts[naming.index - 1]
    else:
        pdf_name = input_file_name
    return ensure_extension(pdf_name, PDF_EXTENSION)


def resolve_log_name(pdf_name, log_name=None):
    if log_name:
        return ensure_extension(log_name, LOG_EXTENSION)
    return strip_extension(pdf_name, PDF_EXTENSION) + LOG_EXTENSION


def resolve_output_names(first_input_path, config):
    """Compute the merged PDF path and the merge log path for a run"""
    logging.info("Building merged PDF file name...")
    pdf_name = resolve_pdf_name(os.path.basename(first_input_path), config.naming)
    output_pdf = os.path.join(config.output_directory, pdf_name)
    logging.info(f"Merged PDF file name '{output_pdf}' built.")

    log_path = os.path.join(config.output_directory, resolve_log_name(pdf_name, config.log_name))
    logging.info(f"Log file name '{log_path}' built.")
    return OutputNamingDecision(output_pdf=output_pdf, log_path=log_path)
