"""
Human readable summary of a merge run
"""

TIMESTAMP_FORMAT = '%d/%m/%Y %H:%M:%S'


def format_timestamp(moment):
    return moment.strftime(TIMESTAMP_FORMAT)


def format_elapsed(elapsed_ms):
    """Milliseconds as HH:MM:SS (hours are not capped at 24)"""
    seconds = elapsed_ms // 1000
    return f"{seconds // 3600:02d}:{(seconds % 3600) // 60:02d}:{seconds % 60:02d}"


def format_report(summary):
    """
    Lines describing a finished run.

    Args:
        summary (MergeSummary): Result of MergeEngine.run

    Returns:
        list: Report lines, without line endings
    """
    if summary.file_count:
        counts = f"{summary.file_count} PDF file(s) merged for a total of {summary.page_count} page(s)."
    else:
        counts = f"No PDF file found in '{summary.input_directory}'."
    return [
        f"MergePDF started at {format_timestamp(summary.started_at)}",
        counts,
        f"MergePDF ended at {format_timestamp(summary.ended_at)}",
        f"Process time : {format_elapsed(summary.elapsed_ms)} ({summary.elapsed_ms} milliseconds.)",
    ]
