"""Identify amplicons with gaps below the minimum required sequencing depth.

Works from a samtools depth style matrix (chromosome, position, then one
depth column per sample) plus the list of BAM files used to build it, which
gives the sample order of the depth columns. Bases inside target regions
that never appear in the matrix count as failed for every sample.
"""
from collections import OrderedDict
import re
import types

import numpy as np

from wrgl import utils
from wrgl.bed import IntervalStore
from wrgl.errors import StructuralParseError
from wrgl.log import get_logger

# bases trimmed from the start of each target region before checking depth
REGION_START_TRIM = 2

# amplicon status labels of the genotyping report
FAILED = "Failed"
NO_MUTATION_DETECTED = "No Mutation Detected"

def sample_from_filename(line):
    """Sample token of a depth file column: second to last field split on _ or .

    /scratch/run/Sample_S12.bam -> S12
    """
    parts = re.split(r"[_.]", line.strip())
    if len(parts) < 2:
        raise StructuralParseError("Could not find sample name in depth sample order line: %s" % line)
    return parts[-2]

def read_sample_order(sample_file):
    """Samples in the order of the depth file columns.
    """
    samples = []
    with utils.open_required(sample_file, "depth sample order file") as in_handle:
        for line in utils.iter_lines(in_handle):
            sample = sample_from_filename(line)
            if sample in samples:
                raise StructuralParseError("Duplicate sample %s in depth sample order file %s"
                                           % (sample, sample_file))
            samples.append(sample)
    return samples

class CoverageResult(object):
    """Frozen per-sample sets of failed region names.

    Regions missing from a sample's set passed.
    """
    def __init__(self, failed):
        self._failed = types.MappingProxyType(
            OrderedDict((sample, frozenset(regions)) for sample, regions in failed.items()))

    @property
    def samples(self):
        return list(self._failed.keys())

    def failed(self, sample):
        try:
            return self._failed[sample]
        except KeyError:
            raise StructuralParseError("Sample %s coverage data not loaded" % sample)

    def passed(self, sample, region):
        return region not in self.failed(sample)

    def as_dict(self):
        return dict(self._failed)

    def __repr__(self):
        return "<CoverageResult: %s samples, %s failed regions>" % (
            len(self._failed), sum(len(x) for x in self._failed.values()))

class FailedRegionAccumulator(object):
    """Collects failed regions while streaming depth, until frozen into a CoverageResult.
    """
    def __init__(self, samples):
        self._failed = OrderedDict((s, set()) for s in samples)
        self._frozen = False

    def add(self, sample, region):
        if self._frozen:
            raise ValueError("Coverage results already finalized")
        self._failed[sample].add(region)

    def add_all(self, region):
        for sample in self._failed:
            self.add(sample, region)

    def freeze(self):
        self._frozen = True
        return CoverageResult(self._failed)

def target_bases(target):
    """Positions to check in each target region, keyed by (chromosome, position).
    """
    bases = OrderedDict()
    for region in target:
        for pos in range(region.start + REGION_START_TRIM, region.end + 1):
            bases[(region.chrom, pos)] = False
    return bases

def _parse_depth_line(line, num_samples, depth_file):
    parts = line.split("\t")
    if len(parts) != num_samples + 2:
        raise StructuralParseError("Expected %s sample depths in %s, found %s: %s"
                                   % (num_samples, depth_file, len(parts) - 2, line))
    try:
        return parts[0], int(parts[1]), np.array(parts[2:], dtype=int)
    except ValueError:
        raise StructuralParseError("Non-integer position or depth in %s: %s" % (depth_file, line))

def analyze_coverage(target, core, depth_file, sample_file, min_depth, log=None):
    """Find core amplicons of each sample containing bases below min_depth.

    target provides the bases to check, core names the amplicon containing a
    failing base. Bases outside every core amplicon are off target and ignored.
    """
    log = get_logger(log)
    log.info("Analysing coverage data...")
    samples = read_sample_order(sample_file)
    observed = target_bases(target)
    failed = FailedRegionAccumulator(samples)
    with utils.open_required(depth_file, "depth file") as in_handle:
        for line in utils.iter_lines(in_handle):
            chrom, pos, depths = _parse_depth_line(line, len(samples), depth_file)
            if (chrom, pos) in observed:
                observed[(chrom, pos)] = True
            low = np.flatnonzero(depths < min_depth)
            if len(low) > 0:
                region = core.lookup(chrom, pos)
                if region:
                    for i in low:
                        failed.add(samples[i], region)
    missing = 0
    for (chrom, pos), seen in observed.items():
        if not seen:
            missing += 1
            region = core.lookup(chrom, pos)
            if region:
                failed.add_all(region)
    if missing:
        log.warning("%s target bases missing from depth file %s, marked as failed" % (missing, depth_file))
    log.info("Analysing coverage data complete.")
    return failed.freeze()

# ## Aligner amplicon statistics

def read_mapping_stats(stats_file, required=True, log=None):
    """Minimum depth of each amplicon from an aligner MappingStats file.

    Amplicon names are in the first column and depths in the fourth. A
    missing optional file gives no depths, so every amplicon fails.
    """
    log = get_logger(log)
    if not required and not utils.file_exists(stats_file):
        log.warning("Mapping statistics file %s not found, amplicons reported as failed" % stats_file)
        return OrderedDict()
    out = OrderedDict()
    with utils.open_required(stats_file, "mapping statistics file") as in_handle:
        for line in utils.iter_lines(in_handle):
            if line.startswith("#"):
                continue
            parts = line.split("\t")
            try:
                out[parts[0]] = int(parts[3])
            except (IndexError, ValueError):
                raise StructuralParseError("Malformed mapping statistics line in %s: %s" % (stats_file, line))
    return out

def amplicon_status(regions, min_depths, min_depth):
    """Classify amplicons as Failed or No Mutation Detected from their minimum depth.

    regions is an IntervalStore or a list of amplicon names. Amplicons
    without a depth are treated as having no coverage.
    """
    if isinstance(regions, IntervalStore):
        names = regions.names()
    else:
        names = list(regions)
    out = []
    for name in names:
        depth = min_depths.get(name, 0)
        out.append((name, depth, FAILED if depth < min_depth else NO_MUTATION_DETECTED))
    return out
