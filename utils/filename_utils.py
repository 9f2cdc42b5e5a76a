"""
Utility functions for handling filenames
"""
import os
import re
import logging
from pathlib import Path


def has_extension(file_name, extension):
    """Case-insensitive check of a file name suffix (extension includes the dot)"""
    return file_name.lower().endswith(extension.lower())


def ensure_extension(file_name, extension):
    """
    Append the extension to a file name unless it already ends with it.

    Args:
        file_name (str): Base file name, e.g. 'invo' or 'Report.PDF'
        extension (str): Extension including the dot, e.g. '.pdf'

    Returns:
        str: The file name ending with the extension (original case kept)
    """
    if has_extension(file_name, extension):
        return file_name
    return file_name + extension


def strip_extension(file_name, extension):
    """Remove a trailing extension (case-insensitive), if present"""
    if has_extension(file_name, extension):
        return file_name[:len(file_name) - len(extension)]
    return file_name


def list_files(directory, extension, recursive=True):
    """
    List every file below a directory whose name ends with the extension.

    Entries are visited in sorted order, files of a directory before its
    sub-directories, so the result is stable for an unchanged tree.

    Args:
        directory (str): Directory to search
        extension (str): Extension including the dot, matched case-insensitively
        recursive (bool): Descend into sub-directories

    Returns:
        list: Absolute paths of the matching files
    """
    found = []
    for root, dirnames, filenames in os.walk(os.path.abspath(directory)):
        dirnames.sort()
        for filename in sorted(filenames):
            if has_extension(filename, extension):
                path = os.path.join(root, filename)
                if os.path.isfile(path):
                    found.append(path)
        if not recursive:
            break
    logging.debug(f"Found {len(found)} '{extension}' file(s) in '{directory}' (recursive={recursive})")
    return found


def make_unique_filename(file_path):
    """
    Make a filename unique by appending (1), (2), etc. if the file exists.

    Args:
        file_path (str): The desired file path

    Returns:
        str: A file path that doesn't exist, 'name (N).ext' when needed
    """
    if not os.path.exists(file_path):
        return file_path

    path_obj = Path(file_path)
    directory = path_obj.parent
    name = path_obj.stem
    extension = path_obj.suffix

    # Continue numbering when the name is already 'base (N)'
    match = re.match(r'^(.+?)\s*\((\d+)\)$', name)
    if match:
        base_name = match.group(1).strip()
        counter = int(match.group(2)) + 1
    else:
        base_name = name
        counter = 1

    while counter <= 1000:
        new_path = directory / f"{base_name} ({counter}){extension}"
        if not os.path.exists(new_path):
            return str(new_path)
        counter += 1
    raise ValueError(f"Unable to create unique filename after 1000 attempts for: {file_path}")


def rename_with_suffix(file_path, suffix):
    """
    Rename a file by appending a literal suffix to its full path.

    An existing file at the target is never replaced: the name is made
    unique ('report.pdf (1).old') instead.

    Returns:
        str: The new path
    """
    new_path = make_unique_filename(file_path + suffix)
    os.rename(file_path, new_path)
    logging.info(f"Renamed '{file_path}' to '{new_path}'")
    return new_path
