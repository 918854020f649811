#!/usr/bin/env python
"""Collapse QC passing variants from caller VCFs into one VCF for snpEff.

Usage:
  wrgl_compress_variants.py <config file> <out VCF> <VCF> [<VCF> ...]

QUAL and INFO DP thresholds come from algorithm: genotyping_qual and
algorithm: genotyping_depth in the configuration.
"""
import argparse
import sys

from wrgl.log import logger, setup_local_logging
from wrgl.pipeline import config_utils
from wrgl.pipeline import datadict as dd
from wrgl.pipeline import version
from wrgl.variation import compress

def main(config_file, out_file, vcf_files):
    config = config_utils.load_config(config_file)
    handler = setup_local_logging(config)
    try:
        logger.info("Starting wrgl-pipeline v%s" % version.__version__)
        thresholds = dd.get_thresholds(config)
        compress.compress_vcf_files(vcf_files, out_file, thresholds["genotyping_qual"],
                                    thresholds["genotyping_depth"], config)
        logger.info("Wrote unannotated variants to %s" % out_file)
    finally:
        handler.pop_application()
        handler.close()

def parse_cl_args(in_args):
    parser = argparse.ArgumentParser(description="Write unique QC passing variants for annotation.")
    parser.add_argument("config_file", help="YAML configuration file with analysis thresholds")
    parser.add_argument("out_file", help="Output VCF of unannotated variants")
    parser.add_argument("vcf_files", nargs="+", help="Variant caller VCF files")
    return vars(parser.parse_args(in_args))

if __name__ == "__main__":
    main(**parse_cl_args(sys.argv[1:]))
