import pytest

from wrgl.errors import DataIntegrityError
from wrgl.variation import compress, vcfutils
from wrgl.variation.vcfutils import GenomicVariant


S1_ROWS = [("chr1", "100", ".", "A", "G", "50", "PASS", "DP=1200", "GT", "0/1", "1/1"),
           ("chr1", "150", ".", "T", "C", "10", "PASS", "DP=1200", "GT", "0/1", "0/1"),
           ("chr1", "200", ".", "G", "T", "50", "PASS", "DP=20", "GT", "0/1", "0/1"),
           ("chr1", "250", ".", "C", "A", "50", "LowQual", "DP=1200", "GT", "0/1", "0/1")]
S2_ROWS = [("chr2", "300", ".", "A", "AT", "60", "PASS", "DP=1500", "GT", "0/1"),
           ("chr1", "100", ".", "A", "G", "60", "PASS", "DP=1500", "GT", "1/1")]


@pytest.fixture
def caller_vcfs(make_vcf):
    return [make_vcf("run1.vcf", S1_ROWS), make_vcf("run2.vcf", S2_ROWS, samples=("S3",))]


class TestPassesQc(object):

    def _rec(self, make_vcf, row):
        return vcfutils.parse_vcf(make_vcf("one.vcf", [row])).records_for("S1")[0]

    def test_thresholds_inclusive(self, make_vcf):
        rec = self._rec(make_vcf, ("chr1", "100", ".", "A", "G", "30", "PASS", "DP=1000", "GT", "0/1", "0/1"))
        assert compress.passes_qc(rec, 30, 1000)
        assert not compress.passes_qc(rec, 30.5, 1000)
        assert not compress.passes_qc(rec, 30, 1001)

    def test_missing_depth(self, make_vcf):
        rec = self._rec(make_vcf, ("chr1", "100", ".", "A", "G", "50", "PASS", "AF=0.5", "GT", "0/1", "0/1"))
        with pytest.raises(DataIntegrityError):
            compress.passes_qc(rec, 30, 1000)

    def test_filtered_depth_not_checked(self, make_vcf):
        rec = self._rec(make_vcf, ("chr1", "100", ".", "A", "G", "50", "LowQual", "AF=0.5", "GT", "0/1", "0/1"))
        assert not compress.passes_qc(rec, 30, 1000)

    def test_non_integer_depth(self, make_vcf):
        rec = self._rec(make_vcf, ("chr1", "100", ".", "A", "G", "50", "PASS", "DP=high", "GT", "0/1", "0/1"))
        with pytest.raises(DataIntegrityError):
            compress.passes_qc(rec, 30, 1000)


class TestCompressVariants(object):

    def test_unique_first_seen_order(self, caller_vcfs):
        vcfs = [vcfutils.parse_vcf(f) for f in caller_vcfs]
        assert compress.compress_variants(vcfs, 30, 1000) == [GenomicVariant("chr1", 100, "A", "G"),
                                                              GenomicVariant("chr2", 300, "A", "AT")]

    def test_no_input(self):
        assert compress.compress_variants([], 30, 1000) == []

    def test_writes_unique_variants(self, caller_vcfs, tmpdir):
        out_file = str(tmpdir.join("unannotated.vcf"))
        compress.compress_vcf_files(caller_vcfs, out_file, 30, 1000)
        written = [r.variant for r in vcfutils.parse_vcf(out_file).records_for("")]
        assert written == [GenomicVariant("chr1", 100, "A", "G"), GenomicVariant("chr2", 300, "A", "AT")]

    def test_uses_transaction_config(self, caller_vcfs, tmpdir, mocker):
        write = mocker.patch("wrgl.variation.vcfutils.write_minimal_vcf")
        config = {"algorithm": {}}
        out_file = str(tmpdir.join("unannotated.vcf"))
        compress.compress_vcf_files(caller_vcfs, out_file, 30, 1000, config)
        write.assert_called_once_with([GenomicVariant("chr1", 100, "A", "G"),
                                       GenomicVariant("chr2", 300, "A", "AT")], out_file, config)

    def test_repeated_input_idempotent(self, caller_vcfs):
        vcfs = [vcfutils.parse_vcf(f) for f in caller_vcfs]
        once = compress.compress_variants(vcfs, 30, 1000)
        assert compress.compress_variants(vcfs + vcfs, 30, 1000) == once

    def test_minimal_output_compresses_to_same_variants(self, caller_vcfs, tmpdir):
        vcfs = [vcfutils.parse_vcf(f) for f in caller_vcfs]
        variants = compress.compress_variants(vcfs, 30, 1000)
        out_file = compress.write_unannotated_vcf(variants, str(tmpdir.join("unannotated.vcf")))
        with open(out_file) as in_handle:
            lines = in_handle.read().splitlines()
        rescored = [l if l.startswith("#") else "\t".join(l.split("\t")[:5] + ["30", "PASS", "DP=1000"])
                    for l in lines]
        rescored_file = str(tmpdir.join("rescored.vcf"))
        with open(rescored_file, "w") as out_handle:
            out_handle.write("\n".join(rescored) + "\n")
        again = compress.compress_variants([vcfutils.parse_vcf(rescored_file)], 30, 1000)
        assert again == variants
