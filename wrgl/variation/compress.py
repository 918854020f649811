"""Collapse QC passing variants from all samples into one file for annotation.

Annotating each distinct variant once, rather than once per sample, keeps
the external snpEff run small. The annotated output is parsed back with
`vcfutils.parse_vcf` and indexed with `effects.derive_annotations`.
"""
from collections import OrderedDict

from wrgl.errors import DataIntegrityError
from wrgl.log import get_logger
from wrgl.variation import vcfutils

PASS_FILTER = "PASS"
DEPTH_KEY = "DP"


def _record_depth(rec, vcf_file):
    if DEPTH_KEY not in rec.info:
        raise DataIntegrityError("Variant %r in %s passes QC but has no %s value; "
                                 "caller output is malformed" % (rec, vcf_file, DEPTH_KEY))
    try:
        return int(rec.info[DEPTH_KEY])
    except ValueError:
        raise DataIntegrityError("Variant %r in %s has a non-integer %s value: %s"
                                 % (rec, vcf_file, DEPTH_KEY, rec.info[DEPTH_KEY]))

def passes_qc(rec, min_qual, min_depth, vcf_file=None):
    """Check FILTER, QUAL and INFO depth of a record against genotyping thresholds.
    """
    if rec.filter != PASS_FILTER or rec.qual < min_qual:
        return False
    return _record_depth(rec, vcf_file) >= min_depth

def compress_variants(vcfs, min_qual, min_depth, log=None):
    """Unique variants passing QC across every sample of the parsed VCFs.

    Variants are returned in the order they are first seen.
    """
    log = get_logger(log)
    log.info("Compressing variants for annotation...")
    unique = OrderedDict()
    for vcf in vcfs:
        for _, rec in vcf.iter_records():
            if passes_qc(rec, min_qual, min_depth, vcf.vcf_file):
                unique[rec.variant] = None
    log.info("Found %s unique variants passing QC" % len(unique))
    return list(unique.keys())

def write_unannotated_vcf(variants, out_file, config=None):
    """Write the compressed variants as a minimal 8 column VCF.
    """
    return vcfutils.write_minimal_vcf(variants, out_file, config)

def compress_vcf_files(vcf_files, out_file, min_qual, min_depth, config=None, log=None):
    """Parse caller VCFs and write their unique QC passing variants to out_file.
    """
    vcfs = [vcfutils.parse_vcf(f, log) for f in vcf_files]
    variants = compress_variants(vcfs, min_qual, min_depth, log)
    return write_unannotated_vcf(variants, out_file, config)
