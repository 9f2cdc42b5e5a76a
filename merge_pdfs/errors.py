"""
Exceptions raised while configuring and running a directory merge
"""


class MergePdfError(Exception):
    """Base class for every failure of a merge run"""


class ConfigurationError(MergePdfError):
    """Naming parameters or configuration values are missing or out of range"""


class DirectoryNotFoundError(MergePdfError):
    pass


class DirectoryConflictError(MergePdfError):
    pass


class DirectoryCreationError(MergePdfError):
    pass


class FileAccessError(MergePdfError):
    """An input PDF could not be read or an output file could not be written"""


class LibraryError(MergePdfError):
    """PyMuPDF rejected a document (malformed input, failed save, ...)"""
