"""Describe sample genotypes with the labels used in variant reports.
"""

HET = "HET"
HOM_ALT = "HOM_ALT"
UNCERTAIN_HET = "UNCERTAIN_HET"
UNCERTAIN_HOM = "UNCERTAIN_HOM"
UNKNOWN = "Unknown"
COMPLEX = "Complex"

# some callers emit 1/0 for heterozygous calls
_UNPHASED_CLASSES = [(HET, ["0/1", "1/0"]),
                     (HOM_ALT, ["1/1"]),
                     # uncertain calls are most likely gaps as well
                     (UNCERTAIN_HET, ["./1", "1/."]),
                     (UNCERTAIN_HOM, ["./."])]

GENOTYPE_CLASSES = [(label, frozenset(gts + [gt.replace("/", "|") for gt in gts]))
                    for label, gts in _UNPHASED_CLASSES]

def classify_genotype(gt):
    """Label a GT value, treating phased (|) and unphased (/) calls alike.

    Anything unrecognised, like multi-allelic calls, is Complex and needs
    further checking.
    """
    for label, gts in GENOTYPE_CLASSES:
        if gt in gts:
            return label
    if gt == "":
        return UNKNOWN
    return COMPLEX

def record_genotype(record):
    """Label the genotype of a parsed VCF record, Unknown when GT is absent.
    """
    return classify_genotype(record.format.get("GT", ""))
