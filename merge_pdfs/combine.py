import fitz  # PyMuPDF
import os
import logging

from merge_pdfs.errors import FileAccessError, LibraryError

# Save options for the resource-optimized mode: garbage=4 merges duplicate
# objects (fonts, images) coming from different inputs.
OPTIMIZED_SAVE_OPTIONS = {'garbage': 4, 'deflate': True, 'clean': True}
PLAIN_SAVE_OPTIONS = {'garbage': 0}


class CombinedPdf:
    """
    Output document of a merge run.

    Pages are appended input by input and written to output_path on close().
    Used as a context manager, the pages appended so far are still written when
    the block exits with an error.
    """

    def __init__(self, output_path, optimize_resources=False):
        self.output_path = output_path
        self.optimize_resources = optimize_resources
        self.document = fitz.open()
        self.closed = False

    @property
    def page_count(self):
        return self.document.page_count

    def append(self, pdf_path):
        """
        Import every page of a PDF at the end of the combined document.

        Returns:
            int: Number of pages imported
        """
        if not os.path.isfile(pdf_path):
            raise FileAccessError(f"Input file '{pdf_path}' does not exist.")
        try:
            source = fitz.open(pdf_path)
        except OSError as e:
            raise FileAccessError(f"Cannot read '{pdf_path}': {e}") from e
        except (RuntimeError, ValueError) as e:
            raise LibraryError(f"Cannot open '{pdf_path}' as PDF: {e}") from e
        try:
            pages = source.page_count
            self.document.insert_pdf(source, links=True, annots=True)
        except (RuntimeError, ValueError) as e:
            raise LibraryError(f"Error adding '{pdf_path}': {e}") from e
        finally:
            source.close()
        logging.debug(f"Added '{pdf_path}' ({pages} pages, {self.page_count} total pages)")
        return pages

    def close(self):
        if self.closed:
            return
        self.closed = True
        try:
            if self.document.page_count == 0:
                logging.warning(f"No page merged, '{self.output_path}' not written.")
                return
            save_options = OPTIMIZED_SAVE_OPTIONS if self.optimize_resources else PLAIN_SAVE_OPTIONS
            logging.debug(f"Saving combined PDF to '{self.output_path}'...")
            self.document.save(self.output_path, **save_options)
        except OSError as e:
            raise FileAccessError(f"Cannot write '{self.output_path}': {e}") from e
        except (RuntimeError, ValueError) as e:
            raise LibraryError(f"Error saving '{self.output_path}': {e}") from e
        finally:
            self.document.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
            return False
        try:
            self.close()
        except (FileAccessError, LibraryError) as close_error:
            logging.error(f"Partial output '{self.output_path}' could not be written: {close_error}")
        return False
