"""Domain classifier: turns a validating resolver answer into a check result."""

import logging
from typing import Optional

import dns.rcode
import dns.rdataclass

from portfolio_checker.models.check_result import CheckResult, CheckStatus
from portfolio_checker.services.resolver import ResolveFn, TransportError
from portfolio_checker.utils.record_types import resolve_type


def rcode_annotation(rcode: int) -> str:
    """Describe a response code for the error column.

    Args:
        rcode: DNS response code.

    Returns:
        str: "" for NOERROR, "(servfail)", "(nxdomain)" or "(rcode: N)".

    Examples:
        >>> rcode_annotation(2)
        '(servfail)'
        >>> rcode_annotation(5)
        '(rcode: 5)'
    """
    if rcode == dns.rcode.NOERROR:
        return ""
    if rcode == dns.rcode.SERVFAIL:
        return "(servfail)"
    if rcode == dns.rcode.NXDOMAIN:
        return "(nxdomain)"
    return f"(rcode: {rcode})"


class DomainClassifier:
    """Classifies domains by DNSSEC status.

    Every non-empty name costs exactly one resolver call. Resolver failures
    end up in the result's error text and are never raised.

    Attributes:
        default_type: Record type used when the requested one is unknown.
    """

    def __init__(
        self,
        resolve: ResolveFn,
        default_type: str = "NS",
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize classifier.

        Args:
            resolve: Resolver collaborator for (name, type, class) queries.
            default_type: Fallback record type mnemonic.
            logger: Logger for per-domain records (defaults to module logger).
        """
        self._resolve = resolve
        self.default_type = default_type.upper()
        self._logger = logger or logging.getLogger(__name__)

    def classify(self, name: str, type_mnemonic: str = "") -> CheckResult:
        """Check a single domain name.

        Args:
            name: Domain name, surrounding whitespace is ignored.
            type_mnemonic: Record type to query, case-insensitive.

        Returns:
            CheckResult: Classification of the resolver answer.
        """
        name = name.strip()
        result = CheckResult(name=name)
        self._logger.debug(f"checking {name} {type_mnemonic}")
        if not name:
            return result

        rdtype, result.query_type = resolve_type(type_mnemonic, self.default_type)

        try:
            answer = self._resolve(name, rdtype, dns.rdataclass.IN)
        except TransportError as e:
            result.error_text = str(e)
            return result

        annotation = rcode_annotation(answer.rcode)

        if answer.have_data or answer.nx_domain:
            result.error_text = annotation
            if answer.secure:
                result.status = CheckStatus.SECURE
            elif answer.bogus:
                result.status = CheckStatus.BOGUS
                result.why = answer.why_bogus
            else:
                result.status = CheckStatus.INSECURE
        else:
            result.error_text = f"nodata {annotation}" if annotation else "nodata"

        return result
