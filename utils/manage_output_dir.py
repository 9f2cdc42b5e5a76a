#!/usr/bin/env python3
"""
Utility functions for resolving and creating input/output directories
"""

import os
import logging


def get_application_directory():
    """Directory relative paths are resolved against - the working directory"""
    return os.getcwd()


def qualify_path(path, base_directory=None):
    """
    Normalize a directory path, resolving relative paths against a base.

    Args:
        path (str): Absolute or relative path ('~' is expanded)
        base_directory (str): Base for relative paths, defaults to the
            application directory

    Returns:
        str: Absolute, normalized path without a trailing separator
    """
    path = os.path.expanduser(path)
    if not os.path.isabs(path):
        path = os.path.join(base_directory or get_application_directory(), path)
    return os.path.normpath(path)


def is_same_directory(first, second):
    return os.path.normpath(first).lower() == os.path.normpath(second).lower()


def ensure_output_folder(output_folder):
    """Create the output folder (and missing parents) if it does not exist yet"""
    if not os.path.exists(output_folder):
        logging.debug(f"Output directory : '{output_folder}' not found.")
        os.makedirs(output_folder, exist_ok=True)
        logging.debug(f"Output directory : '{output_folder}' created.")
    return output_folder
