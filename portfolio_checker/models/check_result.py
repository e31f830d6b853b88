"""Domain check result models."""

from dataclasses import dataclass
from enum import Enum


class CheckStatus(str, Enum):
    """DNSSEC security status of a checked domain.

    Values are the literal strings written to reports. Reports are ordered
    on these strings, so UNSET sorts first and BOGUS before the others.
    """

    UNSET = ""  # No data, transport error or blank input
    BOGUS = "bogus"  # Validation attempted and failed
    INSECURE = "insecure"  # No signatures, validation not applicable
    SECURE = "secure"  # Chain of trust verified


@dataclass
class CheckResult:
    """Outcome of checking a single domain name.

    Attributes:
        query_type: Record type mnemonic actually queried (empty if no query).
        name: Whitespace-trimmed domain name.
        error_text: Error or response-code annotation.
        status: DNSSEC security status.
        why: Validator explanation, only set for bogus results.
    """

    query_type: str = ""
    name: str = ""
    error_text: str = ""
    status: CheckStatus = CheckStatus.UNSET
    why: str = ""
