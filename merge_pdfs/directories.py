"""
Input/output directory validation for a merge run
"""

import os
import logging
from dataclasses import dataclass

from merge_pdfs.errors import DirectoryNotFoundError, DirectoryConflictError, DirectoryCreationError
from utils.manage_output_dir import qualify_path, is_same_directory, ensure_output_folder


@dataclass(frozen=True)
class PreparedDirectories:
    input_directory: str
    output_directory: str
    same_directory: bool


def prepare_directories(config):
    """
    Qualify the configured directories, check the input one and create the output one.

    The output directory defaults to the input directory.

    Raises:
        DirectoryNotFoundError: input directory missing or not a directory
        DirectoryConflictError: output path exists but is not a directory
        DirectoryCreationError: output directory could not be created
    """
    input_directory = qualify_path(config.input_directory)
    logging.debug(f"Input directory = '{input_directory}'")
    if config.output_directory:
        output_directory = qualify_path(config.output_directory)
    else:
        output_directory = input_directory
    logging.debug(f"Output directory = '{output_directory}'")

    if not os.path.isdir(input_directory):
        raise DirectoryNotFoundError(f"The input directory '{input_directory}' was not found or is not a directory.")

    if os.path.exists(output_directory) and not os.path.isdir(output_directory):
        raise DirectoryConflictError(f"The output directory '{output_directory}' was found BUT is NOT a directory.")
    try:
        ensure_output_folder(output_directory)
    except OSError as e:
        raise DirectoryCreationError(f"The output directory '{output_directory}' could not be created: {e}") from e

    return PreparedDirectories(
        input_directory=input_directory,
        output_directory=output_directory,
        same_directory=is_same_directory(input_directory, output_directory),
    )
