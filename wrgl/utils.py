"""Helpful utilities for reading and writing pipeline text files.
"""
import contextlib
import gzip
import os
import shutil
import time

from wrgl.errors import StructuralParseError


def safe_makedir(dname):
    """Make a directory if it doesn't exist, handling concurrent race conditions.
    """
    if not dname:
        return dname
    num_tries = 0
    max_tries = 5
    while not os.path.exists(dname):
        # we could get an error here if multiple processes are creating
        # the directory at the same time. Grr, concurrency.
        try:
            os.makedirs(dname)
        except OSError:
            if num_tries > max_tries:
                raise
            num_tries += 1
            time.sleep(2)
    return dname

def file_exists(fname):
    """Check if a file exists and is non-empty.
    """
    try:
        return fname and os.path.exists(fname) and os.path.getsize(fname) > 0
    except OSError:
        return False

def get_size(path):
    """ Returns the size in bytes if `path` is a file,
        or the size of all files in `path` if it's a directory.
    """
    if os.path.isfile(path):
        return os.path.getsize(path)
    return sum(get_size(os.path.join(path, f)) for f in os.listdir(path))

def remove_safe(f):
    try:
        if os.path.isdir(f):
            shutil.rmtree(f)
        else:
            os.remove(f)
    except OSError:
        pass

def get_abspath(path, pardir=None):
    if pardir is None:
        pardir = os.getcwd()
    path = os.path.expandvars(path)
    return os.path.normpath(os.path.join(pardir, path))

def open_gzipsafe(f, is_gz=False):
    """Open a text file read-only, transparently handling gzip compression.

    Files are only ever opened for reading so external tools can inspect
    them while we hold a handle.
    """
    if f.endswith(".gz") or is_gz:
        return gzip.open(f, "rt", encoding="utf-8", errors="ignore")
    else:
        return open(f, encoding="utf-8", errors="ignore")

@contextlib.contextmanager
def open_required(f, descr):
    """Open a required input file, turning IO problems into parse errors.
    """
    try:
        in_handle = open_gzipsafe(f)
    except (IOError, OSError) as e:
        raise StructuralParseError("Could not read %s %s: %s" % (descr, f, e))
    with in_handle:
        yield in_handle

def iter_lines(in_handle):
    """Iterate over file lines without trailing newlines, skipping blanks.
    """
    for line in in_handle:
        line = line.rstrip("\r\n")
        if line:
            yield line
