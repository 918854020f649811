import os

import logbook
import pytest

VCF_COLUMNS = ["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO"]
DEFAULT_META = ['##INFO=<ID=DP,Number=1,Type=Integer,Description="Total Depth">',
                '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">']


@pytest.fixture
def write_file(tmpdir):
    """Write text lines to a file inside the test directory, returning its path.
    """
    def _write(name, lines):
        path = os.path.join(str(tmpdir), name)
        with open(path, "w") as out_handle:
            out_handle.write("".join("%s\n" % l for l in lines))
        return path
    return _write


@pytest.fixture
def make_vcf(write_file):
    """Write a small VCF from tab-free row tuples.

    samples=None gives a sites-only file without a FORMAT column.
    """
    def _make(name, body, samples=("S1", "S2"), version="##fileformat=VCFv4.1", meta=None):
        header = list(VCF_COLUMNS)
        if samples is not None:
            header += ["FORMAT"] + list(samples)
        lines = [version] if version else []
        lines += DEFAULT_META if meta is None else meta
        lines.append("\t".join(header))
        lines += ["\t".join(row) for row in body]
        return write_file(name, lines)
    return _make


@pytest.fixture
def log_handler():
    handler = logbook.TestHandler(level=logbook.DEBUG)
    with handler.applicationbound():
        yield handler


@pytest.fixture
def logged_warnings(log_handler):
    """Retrieve messages of warnings logged so far.
    """
    def _get():
        return [r.message for r in log_handler.records if r.level == logbook.WARNING]
    return _get
