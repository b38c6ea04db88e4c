import pytest

from chiral_db.errors import ConfigurationError
from chiral_db.fingerprint import FingerprintFamily, FingerprintKind, ecfp, fcfp


class TestFingerprintKind:
    @pytest.mark.parametrize("tag,diameter", [("ECFP0", 0), ("ECFP2", 2), ("ECFP4", 4), ("ECFP6", 6), ("ECFP8", 8), ("ECFP10", 10)])
    def test_ecfp_tags(self, tag, diameter):
        kind = FingerprintKind.from_tag(tag, 2048)
        assert kind.family is FingerprintFamily.ECFP
        assert kind.diameter == diameter
        assert kind.radius == diameter // 2
        assert kind.tag == tag

    def test_legacy_openbabel_tag(self):
        assert FingerprintKind.from_tag("OpenBabelECFP4", 1024) == ecfp(4, 1024)

    def test_fcfp_tag(self):
        assert FingerprintKind.from_tag("FCFP6", 512) == fcfp(6, 512)

    @pytest.mark.parametrize("tag", ["ecfp4", "ECFP3", "ECFP12", "MACCS", "", "ECFP4\n", " ECFP4", "ECFP4 ", "xECFP4"])
    def test_unknown_tags(self, tag):
        with pytest.raises(ConfigurationError):
            FingerprintKind.from_tag(tag, 2048)

    @pytest.mark.parametrize("nbits", [0, -32, 100, 31])
    def test_nbits_must_be_positive_word_multiple(self, nbits):
        with pytest.raises(ConfigurationError):
            ecfp(4, nbits)

    def test_span_and_describe(self):
        kind = ecfp(4, 2048)
        assert kind.span == 64
        assert kind.describe() == "ECFP4(2048 bits)"

    def test_hashable(self):
        assert len({ecfp(4, 64), ecfp(4, 64), fcfp(4, 64)}) == 2
