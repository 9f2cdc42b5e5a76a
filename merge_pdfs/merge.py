"""
Merge every PDF found in a directory into a single PDF file.

Files are discovered (recursively unless disabled), the output and log names
are resolved from the first file, and each input is appended page by page to
the combined document. The merge log gets one '<input path>\\t<pages>' line
per input, flushed as soon as the input is merged.
"""

import os
import logging
from dataclasses import dataclass, replace
from datetime import datetime

from merge_pdfs.combine import CombinedPdf
from merge_pdfs.config import PDF_EXTENSION, validate_naming
from merge_pdfs.directories import prepare_directories
from merge_pdfs.errors import FileAccessError, MergePdfError
from merge_pdfs.naming import resolve_output_names
from merge_pdfs.report import format_report, format_timestamp
from utils.filename_utils import list_files, rename_with_suffix
from utils.process_with_progress import ProgressMarks

RENAMED_INPUT_SUFFIX = '.old'


@dataclass
class MergeRunState:
    started_at: datetime
    ended_at: datetime = None
    files_processed: int = 0
    pages_processed: int = 0

    def record(self, pages):
        self.files_processed += 1
        self.pages_processed += pages


@dataclass(frozen=True)
class MergeSummary:
    input_directory: str
    file_count: int
    page_count: int
    started_at: datetime
    ended_at: datetime
    output_pdf: str = None
    log_path: str = None

    @property
    def elapsed_ms(self):
        return int((self.ended_at - self.started_at).total_seconds() * 1000)


def protect_inputs(pdf_files, output_pdf):
    """
    Rename every input whose path is the output path, so writing the merged
    PDF cannot overwrite a file that is about to be read.

    Returns:
        list: Input paths with renamed entries substituted in place
    """
    target = os.path.normcase(os.path.normpath(output_pdf))
    protected = []
    for pdf_path in pdf_files:
        if os.path.normcase(os.path.normpath(pdf_path)) == target:
            try:
                pdf_path = rename_with_suffix(pdf_path, RENAMED_INPUT_SUFFIX)
            except (OSError, ValueError) as e:
                raise FileAccessError(f"Cannot rename '{pdf_path}' before merging: {e}") from e
        protected.append(pdf_path)
    return protected


def open_merge_log(log_path):
    try:
        return open(log_path, 'w', encoding='utf-8')
    except OSError as e:
        raise FileAccessError(f"Cannot create log file '{log_path}': {e}") from e


def write_log_line(merge_log, pdf_path, pages):
    try:
        merge_log.write(f"{pdf_path}\t{pages}\n")
        merge_log.flush()
    except OSError as e:
        raise FileAccessError(f"Cannot write to log file '{merge_log.name}': {e}") from e


class MergeEngine:
    """
    Runs one directory merge.

    Args:
        config (MergeConfiguration): Resolved configuration
        progress_callback: Optional callable(files_processed, pages_processed, pdf_path)
            invoked after each merged input
        clock: Callable returning the current datetime
    """

    def __init__(self, config, progress_callback=None, clock=datetime.now):
        self.config = config
        self.progress_callback = progress_callback
        self.clock = clock

    def run(self):
        state = MergeRunState(started_at=self.clock())
        logging.info(f"MergePDF started at {format_timestamp(state.started_at)}")
        validate_naming(self.config.naming)

        directories = prepare_directories(self.config)
        config = replace(
            self.config,
            input_directory=directories.input_directory,
            output_directory=directories.output_directory,
        )

        logging.debug(f"Retrieving every PDFs found in '{config.input_directory}'...")
        pdf_files = list_files(config.input_directory, PDF_EXTENSION, config.recursive)
        if not pdf_files:
            return self._summary(config, state)

        naming = resolve_output_names(pdf_files[0], config)
        if directories.same_directory and config.naming_is_derived:
            logging.info(f"Output directory is the input directory: '{pdf_files[0]}' is renamed before merging.")
        pdf_files = protect_inputs(pdf_files, naming.output_pdf)
        self._merge_files(pdf_files, naming, config, state)
        return self._summary(config, state, naming)

    def _merge_files(self, pdf_files, naming, config, state):
        logging.info("Merging PDFs files...")
        # The merge log is closed before the combined PDF is written.
        with CombinedPdf(naming.output_pdf, config.optimize_resources) as combined:
            with open_merge_log(naming.log_path) as merge_log:
                for pdf_path in pdf_files:
                    logging.debug(f"Adding '{pdf_path}' to '{naming.output_pdf}'...")
                    pages = combined.append(pdf_path)
                    write_log_line(merge_log, pdf_path, pages)
                    state.record(pages)
                    logging.debug(f"'{pdf_path}' added.")
                    if self.progress_callback:
                        self.progress_callback(state.files_processed, state.pages_processed, pdf_path)
            logging.debug(f"Closing '{naming.output_pdf}'...")
        logging.debug(f"'{naming.output_pdf}' closed.")

    def _summary(self, config, state, naming=None):
        state.ended_at = self.clock()
        return MergeSummary(
            input_directory=config.input_directory,
            file_count=state.files_processed,
            page_count=state.pages_processed,
            started_at=state.started_at,
            ended_at=state.ended_at,
            output_pdf=naming.output_pdf if naming else None,
            log_path=naming.log_path if naming else None,
        )


def merge_directory(config, progress_stream=None):
    """
    Run a merge and report the outcome.

    Every failure is logged with its traceback and turned into False.

    Args:
        config (MergeConfiguration): Resolved configuration
        progress_stream: Stream for progress marks (defaults to stdout)

    Returns:
        bool: True if the run completed (including when no PDF was found)
    """
    progress = None
    if config.display_progress and not config.debug:
        progress = ProgressMarks(progress_stream)
    try:
        summary = MergeEngine(config, progress_callback=progress).run()
    except MergePdfError:
        logging.exception("An error occurred")
        return False
    except Exception:
        logging.exception("An unexpected error occurred")
        return False
    finally:
        if progress:
            progress.finish()
    for line in format_report(summary):
        logging.info(line)
    return True
