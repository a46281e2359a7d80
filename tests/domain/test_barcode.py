"""Unit tests for barcode candidate generation."""

from packdesk.domain.model.barcode import normalize_candidates


class TestNormalizeCandidates:

    def test_strips_one_leading_zero(self):
        assert normalize_candidates("0123") == ["0123", "123"]

    def test_prepends_zero_when_none(self):
        assert normalize_candidates("123") == ["123", "0123"]

    def test_only_one_zero_is_stripped(self):
        assert normalize_candidates("00123") == ["00123", "0123"]

    def test_lone_zero_gets_padded(self):
        assert normalize_candidates("0") == ["0", "00"]

    def test_non_numeric_has_no_variant(self):
        assert normalize_candidates("SKU-0123") == ["SKU-0123"]

    def test_whitespace_trimmed(self):
        assert normalize_candidates("  5941234567890\n") == ["5941234567890", "05941234567890"]

    def test_blank_has_no_candidates(self):
        assert normalize_candidates("   ") == []
