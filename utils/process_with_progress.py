
import sys


class ProgressMarks:
    """
    Console progress callback for a merge run.

    Prints one mark per merged file: '.' for most files, '|' before the dot
    of the 5th file of each ten, and the running count instead of a dot for
    every 10th file.
    """

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout
        self.started = False

    def __call__(self, files_processed, pages_processed, pdf_path):
        if not self.started:
            self.stream.write("\n")
            self.started = True
        if files_processed % 5 == 0 and files_processed % 10 != 0:
            self.stream.write("|")
        if files_processed % 10 == 0:
            self.stream.write(str(files_processed))
        else:
            self.stream.write(".")
        self.stream.flush()

    def finish(self):
        if self.started:
            self.stream.write("\n")
            self.stream.flush()
