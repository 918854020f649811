"""Utilities for reading variant files in standard VCF format.

Parses VCF v4.1/v4.2 output from the variant callers and annotators into
per-sample lists of records. INFO and FORMAT values are kept as ordered
string maps since the available keys change from line to line.
"""
from collections import namedtuple, OrderedDict
import re

from wrgl import utils
from wrgl.distributed.transaction import file_transaction
from wrgl.errors import StructuralParseError
from wrgl.log import get_logger

ACCEPTED_VERSIONS = ("##fileformat=VCFv4.1", "##fileformat=VCFv4.2")
HEADER_COLUMNS = ("#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO", "FORMAT")
NO_GENOTYPES = ""

GenomicVariant = namedtuple("GenomicVariant", ["chrom", "pos", "ref", "alt"])

_RECORD_FIELDS = ["chrom", "pos", "id", "ref", "alt", "qual", "filter", "info", "format"]

class VcfRecord(namedtuple("VcfRecord", _RECORD_FIELDS)):
    """A single VCF line, seen through the FORMAT values of one sample.
    """
    __slots__ = ()

    @property
    def variant(self):
        return GenomicVariant(self.chrom, self.pos, self.ref, self.alt)

    def __repr__(self):
        return "<VcfRecord: %s:%s%s>%s>" % (self.chrom, self.pos, self.ref, self.alt)

# ## Field parsing

def parse_info(info_field):
    """Split an INFO column into key/value pairs: DP=100;AF=0.5

    Flags without a value are not represented.
    """
    out = OrderedDict()
    if info_field == ".":
        return out
    for token in info_field.split(";"):
        if "=" in token:
            key, val = token.split("=", 1)
            out[key] = val
    return out

def parse_format(format_keys, sample_field):
    """Pair FORMAT keys with a sample's colon separated values.

    When the number of values does not match the keys, only the first
    (genotype) value is retained and the remaining keys are blank.
    """
    out = OrderedDict()
    if sample_field == ".":
        return out
    keys = format_keys.split(":")
    vals = sample_field.split(":")
    if len(keys) != len(vals):
        out[keys[0]] = vals[0]
        for key in keys[1:]:
            out[key] = ""
    else:
        for key, val in zip(keys, vals):
            out[key] = val
    return out

def parse_qual(qual_field):
    return 0.0 if qual_field == "." else float(qual_field)

def _meta_ids(meta, prefix):
    id_re = re.compile(r"^%s=<ID=([^,>]+)" % prefix)
    out = []
    for line in meta:
        m = id_re.match(line)
        if m:
            out.append(m.group(1))
    return out

# ## Parsed VCF representation

class ParsedVcf(object):
    """Header and per-sample records of a completely parsed VCF file.

    `records` maps each sample column name, or an empty string when the
    file has no genotype columns, to records in file order.
    """
    def __init__(self, vcf_file, version, meta, header, records):
        self.vcf_file = vcf_file
        self.version = version
        self.meta = tuple(meta)
        self.header = tuple(header)
        self.records = records

    @property
    def samples(self):
        return list(self.header[len(HEADER_COLUMNS):])

    @property
    def has_genotypes(self):
        return len(self.header) > len(HEADER_COLUMNS)

    @property
    def info_ids(self):
        return _meta_ids(self.meta, "##INFO")

    @property
    def format_ids(self):
        return _meta_ids(self.meta, "##FORMAT")

    def records_for(self, sample):
        return self.records[sample]

    def iter_records(self):
        """All records across every sample bucket.
        """
        for sample, records in self.records.items():
            for rec in records:
                yield sample, rec

    def __repr__(self):
        return "<ParsedVcf: %s with %s samples>" % (self.vcf_file, len(self.records))

# ## Parsing

UNSTARTED, HEADER, BODY, PARSED = "unstarted", "header", "body", "parsed"

class VcfParser(object):
    """Line driven VCF parser moving through UNSTARTED, HEADER, BODY and PARSED.
    """
    def __init__(self, vcf_file=None, log=None):
        self.vcf_file = vcf_file
        self.log = get_logger(log)
        self.state = UNSTARTED
        self.version = None
        self.meta = []
        self.header = None
        self.records = None

    def feed(self, line):
        if self.state == PARSED:
            raise ValueError("VCF parser for %s already finished" % self.vcf_file)
        if self.state == UNSTARTED:
            self._check_version(line)
            self.state = HEADER
            # the version line is consumed unless it is already the column header
            if line.startswith("##"):
                self.meta.append(line)
                return
            elif not line.startswith("#"):
                return
        if line.startswith("##"):
            if self.state == BODY:
                self._fail("Meta line found after variant records: %s" % line)
            self.meta.append(line)
        elif line.startswith("#"):
            if self.state == BODY:
                self._fail("Column header found after variant records: %s" % line)
            self.header = line.split("\t")
        else:
            if self.state == HEADER:
                self._start_body()
            self._add_row(line)

    def finish(self):
        if self.state in (UNSTARTED, HEADER):
            self._start_body()
        self.state = PARSED
        return ParsedVcf(self.vcf_file, self.version, self.meta, self.header, self.records)

    def _fail(self, msg):
        msg = "Malformed VCF %s. %s" % (self.vcf_file, msg)
        self.log.error(msg)
        raise StructuralParseError(msg)

    def _check_version(self, line):
        self.version = line
        if line not in ACCEPTED_VERSIONS:
            self.log.warning("File format of %s not VCF v4.1 or v4.2, parser may not function "
                             "correctly: %s" % (self.vcf_file, line))

    def _start_body(self):
        """Validate the column header and prepare sample buckets.
        """
        header = self.header or []
        if len(header) < len(HEADER_COLUMNS) - 1:
            self._fail("Too few column headers.")
        for expected, found in zip(HEADER_COLUMNS, header):
            if expected != found:
                self._fail("Incorrect column header format, expected %s and found %s." % (expected, found))
        self.records = OrderedDict()
        if len(header) <= len(HEADER_COLUMNS):
            self.log.warning("VCF %s has no genotypes" % self.vcf_file)
            self.records[NO_GENOTYPES] = []
        else:
            for sample in header[len(HEADER_COLUMNS):]:
                self.records[sample] = []
        self.header = header
        self.state = BODY

    def _add_row(self, line):
        parts = line.split("\t")
        if len(parts) < len(HEADER_COLUMNS) - 1:
            self._fail("Too few columns in variant line: %s" % line)
        try:
            pos = int(parts[1])
            qual = parse_qual(parts[5])
        except ValueError:
            self._fail("Non-numeric position or quality in variant line: %s" % line)
        info = parse_info(parts[7])
        samples = self.header[len(HEADER_COLUMNS):]
        if not samples:
            self.records[NO_GENOTYPES].append(VcfRecord(parts[0], pos, parts[2], parts[3], parts[4],
                                                        qual, parts[6], info, OrderedDict()))
            return
        if len(parts) < len(self.header):
            self._fail("Missing sample columns in variant line: %s" % line)
        for i, sample in enumerate(samples):
            fmt = parse_format(parts[8], parts[len(HEADER_COLUMNS) + i])
            self.records[sample].append(VcfRecord(parts[0], pos, parts[2], parts[3], parts[4],
                                                  qual, parts[6], info, fmt))

def parse_vcf(vcf_file, log=None):
    """Parse a VCF file into header information and per-sample records.
    """
    log = get_logger(log)
    log.info("Parsing %s" % vcf_file)
    parser = VcfParser(vcf_file, log)
    with utils.open_required(vcf_file, "VCF file") as in_handle:
        for line in utils.iter_lines(in_handle):
            parser.feed(line)
    return parser.finish()

# ## Writing

def write_minimal_vcf(variants, out_file, config=None):
    """Write variants as a sites-only VCF with empty ID, QUAL, FILTER and INFO columns.
    """
    with file_transaction(config, out_file) as tx_out_file:
        with open(tx_out_file, "w") as out_handle:
            out_handle.write("%s\n" % ACCEPTED_VERSIONS[0])
            out_handle.write("\t".join(HEADER_COLUMNS[:-1]) + "\n")
            for v in variants:
                out_handle.write("%s\t%s\t.\t%s\t%s\t.\t.\t.\n" % (v.chrom, v.pos, v.ref, v.alt))
    return out_file
