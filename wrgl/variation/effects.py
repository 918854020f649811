"""Index functional annotations of variants produced by external annotators.

Supported:
  snpEff EFF: https://pcingola.github.io/SnpEff/se_inputoutput/#eff-field-vcf-output-files

The snpEff run itself happens outside this package; this reads the
annotated VCF back into a lookup from variant to annotations.
"""
from collections import namedtuple, OrderedDict
import re

from wrgl.errors import DataIntegrityError, StructuralParseError
from wrgl.log import get_logger
from wrgl.pipeline import datadict as dd
from wrgl.variation import vcfutils

EFF_KEY = "EFF"
INTERPRETATION_KEY = "INT"
SKIP_EFFECT_PREFIX = "sequence_feature"

_EFF_FIELDS = ["effect", "impact", "functional_class", "codon_change", "aa_change",
               "aa_length", "gene", "biotype", "coding", "transcript", "exon", "allele"]
_EFF_SPLIT = re.compile(r"[()|]")

class Annotation(namedtuple("Annotation", _EFF_FIELDS)):
    """One transcript level snpEff EFF annotation. Values are not validated.
    """
    __slots__ = ()

    def _hgvs(self):
        parts = self.aa_change.split("/")
        if len(parts) == 2:
            return parts[1], parts[0]
        elif len(parts) == 1:
            return parts[0], ""
        else:
            return "", ""

    @property
    def hgvs_c(self):
        """Coding (c.) or non-coding (n.) change.
        """
        return self._hgvs()[0]

    @property
    def hgvs_p(self):
        """Protein (p.) change, empty when only a coding change is reported.
        """
        return self._hgvs()[1]

    def __repr__(self):
        return "<Annotation: %s:%s>" % (self.transcript, self.aa_change)

def parse_eff(eff_value):
    """Split an EFF INFO value into annotations, dropping sequence_feature entries.

    NON_SYNONYMOUS_CODING(MODERATE|MISSENSE|gGt/gAt|p.Gly12Asp/c.35G>A|189|KRAS|protein_coding|CODING|ENST00000256078|2|1)
    """
    out = []
    for sub_eff in eff_value.split(","):
        parts = _EFF_SPLIT.split(sub_eff)
        if parts[0].startswith(SKIP_EFFECT_PREFIX):
            continue
        if len(parts) < len(_EFF_FIELDS):
            raise StructuralParseError("Unexpected EFF annotation, found %s of %s fields: %s"
                                       % (len(parts), len(_EFF_FIELDS), sub_eff))
        out.append(Annotation(*parts[:len(_EFF_FIELDS)]))
    return out

def derive_annotations(vcf, log=None):
    """Collect the set of EFF annotations for every annotated variant in a parsed VCF.

    The same EFF string shows up once per sample bucket, so each distinct
    value is only split once.
    """
    log = get_logger(log)
    parsed = {}
    out = OrderedDict()
    for _, rec in vcf.iter_records():
        eff = rec.info.get(EFF_KEY)
        if eff is None:
            continue
        if eff not in parsed:
            parsed[eff] = parse_eff(eff)
        if parsed[eff]:
            out.setdefault(rec.variant, set()).update(parsed[eff])
    log.debug("Found snpEff annotations for %s variants in %s" % (len(out), vcf.vcf_file))
    return out

def derive_interpretations(vcf, log=None):
    """Map variants to stored clinical interpretations.

    Reads the INT value of a sites-only interpretations VCF, falling back to
    EFF for files written by older snpEff configurations. A variant listed
    more than once keeps its first interpretation and logs a warning rather
    than aborting the run.
    """
    log = get_logger(log)
    out = OrderedDict()
    for _, rec in vcf.iter_records():
        if INTERPRETATION_KEY in rec.info:
            val = rec.info[INTERPRETATION_KEY]
        elif EFF_KEY in rec.info:
            log.warning("Could not find %s value for %r, using %s" % (INTERPRETATION_KEY, rec, EFF_KEY))
            val = rec.info[EFF_KEY]
        else:
            msg = "Could not find %s or %s value in %r" % (INTERPRETATION_KEY, EFF_KEY, rec)
            log.error(msg)
            raise DataIntegrityError(msg)
        if rec.variant in out:
            log.warning("Duplicate interpretation for %r, keeping the first" % (rec,))
            continue
        out[rec.variant] = val
    return out

def load_interpretations(config, log=None):
    """Read the interpretations VCF configured under resources: interpretations.

    Runs without a configured file report no stored interpretations.
    """
    log = get_logger(log)
    interpretations_file = dd.get_interpretations(config)
    if not interpretations_file:
        log.warning("No interpretations VCF configured, variants reported without interpretations")
        return OrderedDict()
    return derive_interpretations(vcfutils.parse_vcf(interpretations_file, log), log)
