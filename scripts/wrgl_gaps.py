#!/usr/bin/env python
"""Report amplicons failing minimum coverage depth for each sample of a run.

Usage:
  wrgl_gaps.py <config file> <target BED> <core BED> <depth file> <sample order file>
     --min-depth override the configured panels_depth threshold
     -o output file (defaults to stdout)

Writes one `sample<TAB>GAP<TAB>amplicon` line per failed amplicon.
"""
import argparse
import sys

from wrgl.bed import IntervalStore
from wrgl.distributed.transaction import file_transaction
from wrgl.log import logger, setup_local_logging
from wrgl.pipeline import config_utils
from wrgl.pipeline import datadict as dd
from wrgl.pipeline import version
from wrgl.variation import coverage

def main(config_file, target_bed, core_bed, depth_file, sample_file, min_depth=None, out_file=None):
    config = config_utils.load_config(config_file)
    handler = setup_local_logging(config)
    try:
        logger.info("Starting wrgl-pipeline v%s" % version.__version__)
        if min_depth is not None:
            config = dd.set_panels_depth(config, min_depth)
        min_depth = dd.get_thresholds(config)["panels_depth"]
        target = IntervalStore.from_file(target_bed)
        core = IntervalStore.from_file(core_bed)
        result = coverage.analyze_coverage(target, core, depth_file, sample_file, min_depth)
        if out_file:
            with file_transaction(config, out_file) as tx_out_file:
                with open(tx_out_file, "w") as out_handle:
                    _write_gaps(result, core, out_handle)
        else:
            _write_gaps(result, core, sys.stdout)
    finally:
        handler.pop_application()
        handler.close()

def _write_gaps(result, core, out_handle):
    for sample in result.samples:
        for region in core.names():
            if not result.passed(sample, region):
                out_handle.write("%s\tGAP\t%s\n" % (sample, region))

def parse_cl_args(in_args):
    parser = argparse.ArgumentParser(description="Report amplicons below minimum coverage depth.")
    parser.add_argument("config_file", help="YAML configuration file with analysis thresholds")
    parser.add_argument("target_bed", help="BED file of target regions to check base by base")
    parser.add_argument("core_bed", help="BED file of amplicons used to name failed regions")
    parser.add_argument("depth_file", help="Depth matrix: chromosome, position, one depth per sample")
    parser.add_argument("sample_file", help="BAM list giving the sample order of depth columns")
    parser.add_argument("--min-depth", type=int, default=None,
                        help="Minimum depth, overriding algorithm: panels_depth")
    parser.add_argument("-o", "--out_file", default=None, help="Output file (defaults to stdout)")
    return vars(parser.parse_args(in_args))

if __name__ == "__main__":
    main(**parse_cl_args(sys.argv[1:]))
