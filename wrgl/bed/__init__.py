"""Load BED region files and look up which region contains a base.

Regions are kept as a flat list in file order. Overlapping regions are not
merged, and a lookup returns the first region in file order that contains
the position.
"""
from collections import namedtuple

from wrgl import utils
from wrgl.errors import StructuralParseError
from wrgl.log import get_logger

Interval = namedtuple("Interval", ["chrom", "start", "end", "name"])

NO_MATCH = ""


def parse_bed_line(line, bed_file=None):
    """Convert a single tab-delimited BED line into an Interval.
    """
    parts = line.split("\t")
    if len(parts) < 4 or not all(parts[:4]):
        raise StructuralParseError("BED file %s is malformed. Check file contains chromosome, "
                                   "start, end and name: %s" % (bed_file, line))
    try:
        start, end = int(parts[1]), int(parts[2])
    except ValueError:
        raise StructuralParseError("BED file %s has non-integer coordinates: %s" % (bed_file, line))
    return Interval(parts[0], start, end, parts[3])


class IntervalStore(object):
    """Ordered, immutable collection of named genomic intervals.
    """
    def __init__(self, intervals, source=None):
        self._intervals = tuple(intervals)
        self.source = source

    @classmethod
    def from_file(cls, bed_file, log=None):
        """Read every region from a BED file, failing on the first malformed line.
        """
        log = get_logger(log)
        log.debug("Parsing BED file %s" % bed_file)
        intervals = []
        try:
            with utils.open_required(bed_file, "BED file") as in_handle:
                for line in utils.iter_lines(in_handle):
                    if line.startswith("#"):
                        continue
                    intervals.append(parse_bed_line(line, bed_file))
        except StructuralParseError as e:
            log.error(str(e))
            raise
        return cls(intervals, bed_file)

    def __iter__(self):
        return iter(self._intervals)

    def __len__(self):
        return len(self._intervals)

    def __repr__(self):
        return "<IntervalStore: %s regions from %s>" % (len(self), self.source)

    def lookup(self, chrom, pos):
        """Name of the first region containing chrom:pos, or an empty string.

        Both ends are inclusive.
        """
        for region in self._intervals:
            if region.chrom == chrom and region.start <= pos <= region.end:
                return region.name
        return NO_MATCH

    def names(self):
        """Distinct region names in file order.
        """
        seen = set()
        out = []
        for region in self._intervals:
            if region.name not in seen:
                seen.add(region.name)
                out.append(region.name)
        return out
