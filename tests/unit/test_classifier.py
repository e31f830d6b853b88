"""Unit tests for DomainClassifier."""

import pytest
from unittest.mock import Mock

import dns.rdataclass
import dns.rdatatype

from portfolio_checker.models.check_result import CheckStatus
from portfolio_checker.models.resolver_answer import ResolverAnswer
from portfolio_checker.services.classifier import DomainClassifier, rcode_annotation
from portfolio_checker.services.resolver import TransportError


class TestRcodeAnnotation:
    """Test rcode_annotation() mapping."""

    @pytest.mark.parametrize(
        "rcode,expected",
        [
            (0, ""),
            (2, "(servfail)"),
            (3, "(nxdomain)"),
            (5, "(rcode: 5)"),
            (1, "(rcode: 1)"),
        ],
    )
    def test_annotation(self, rcode, expected):
        assert rcode_annotation(rcode) == expected


class TestClassifyBlankInput:
    """Blank names never reach the resolver."""

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_blank_name_short_circuits(self, mock_resolve, name):
        classifier = DomainClassifier(mock_resolve)

        result = classifier.classify(name, "A")

        mock_resolve.assert_not_called()
        assert result.name == ""
        assert result.status == CheckStatus.UNSET
        assert result.error_text == ""
        assert result.why == ""
        assert result.query_type == ""


class TestClassifyQuery:
    """Test how the resolver is called."""

    def test_one_resolver_call_per_name(self, mock_resolve):
        classifier = DomainClassifier(mock_resolve)

        classifier.classify("  example.nl \n", "mx")

        mock_resolve.assert_called_once_with(
            "example.nl", dns.rdatatype.MX, dns.rdataclass.IN
        )

    def test_name_is_trimmed(self, mock_resolve):
        result = DomainClassifier(mock_resolve).classify(" example.nl ", "A")
        assert result.name == "example.nl"

    def test_records_canonical_type(self, mock_resolve):
        result = DomainClassifier(mock_resolve).classify("example.nl", "dnskey")
        assert result.query_type == "DNSKEY"

    def test_unknown_type_uses_default(self, mock_resolve):
        classifier = DomainClassifier(mock_resolve, default_type="NS")

        result = classifier.classify("example.nl", "PTR")

        assert result.query_type == "NS"
        args, _ = mock_resolve.call_args
        assert args[1] == dns.rdatatype.NS

    def test_empty_type_uses_default(self, mock_resolve):
        classifier = DomainClassifier(mock_resolve, default_type="A")

        result = classifier.classify("example.nl")

        assert result.query_type == "A"


class TestClassifyOutcomes:
    """Test classification of resolver answers."""

    def test_secure(self):
        resolve = Mock(return_value=ResolverAnswer(have_data=True, secure=True))

        result = DomainClassifier(resolve).classify("example.nl", "NS")

        assert result.status == CheckStatus.SECURE
        assert result.error_text == ""
        assert result.why == ""

    def test_bogus_carries_reason(self):
        resolve = Mock(
            return_value=ResolverAnswer(
                have_data=True, bogus=True, why_bogus="signature expired"
            )
        )

        result = DomainClassifier(resolve).classify("bogus.nl", "NS")

        assert result.status == CheckStatus.BOGUS
        assert result.why == "signature expired"

    def test_insecure(self):
        resolve = Mock(return_value=ResolverAnswer(have_data=True))

        result = DomainClassifier(resolve).classify("example.com", "NS")

        assert result.status == CheckStatus.INSECURE
        assert result.why == ""

    def test_secure_takes_precedence_over_bogus(self):
        resolve = Mock(
            return_value=ResolverAnswer(
                have_data=True, secure=True, bogus=True, why_bogus="x"
            )
        )

        result = DomainClassifier(resolve).classify("example.nl", "NS")

        assert result.status == CheckStatus.SECURE
        assert result.why == ""

    def test_signed_nxdomain_is_classified(self):
        resolve = Mock(
            return_value=ResolverAnswer(nx_domain=True, secure=True, rcode=3)
        )

        result = DomainClassifier(resolve).classify("missing.nl", "A")

        assert result.status == CheckStatus.SECURE
        assert result.error_text == "(nxdomain)"

    def test_nodata(self):
        resolve = Mock(return_value=ResolverAnswer(rcode=0))

        result = DomainClassifier(resolve).classify("example.nl", "MX")

        assert result.status == CheckStatus.UNSET
        assert result.error_text == "nodata"

    def test_nodata_servfail(self):
        resolve = Mock(return_value=ResolverAnswer(rcode=2))

        result = DomainClassifier(resolve).classify("broken.nl", "NS")

        assert result.status == CheckStatus.UNSET
        assert result.error_text == "nodata (servfail)"

    def test_nodata_other_rcode(self):
        resolve = Mock(return_value=ResolverAnswer(rcode=5))

        result = DomainClassifier(resolve).classify("refused.nl", "NS")

        assert result.error_text == "nodata (rcode: 5)"

    def test_nodata_ignores_validation_flags(self):
        resolve = Mock(
            return_value=ResolverAnswer(secure=True, bogus=True, why_bogus="x", rcode=2)
        )

        result = DomainClassifier(resolve).classify("example.nl", "NS")

        assert result.status == CheckStatus.UNSET
        assert result.why == ""
        assert result.error_text == "nodata (servfail)"

    def test_transport_error_is_surfaced_verbatim(self):
        resolve = Mock(side_effect=TransportError("The DNS operation timed out."))

        result = DomainClassifier(resolve).classify("example.nl", "NS")

        assert result.error_text == "The DNS operation timed out."
        assert result.status == CheckStatus.UNSET
        assert result.why == ""
        assert result.query_type == "NS"
        resolve.assert_called_once()

    def test_unexpected_exception_propagates(self):
        resolve = Mock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError, match="boom"):
            DomainClassifier(resolve).classify("example.nl", "NS")


def test_classifier_logs_to_injected_logger(mock_resolve):
    """Test that the classifier writes to the logger it was given."""
    logger = Mock()

    DomainClassifier(mock_resolve, logger=logger).classify("example.nl", "A")

    logger.debug.assert_called_once()
    assert "example.nl" in logger.debug.call_args[0][0]
