"""Record type table for domain checks."""

from types import MappingProxyType
from typing import Mapping, Tuple

import dns.rdatatype


RECORD_TYPES: Mapping[str, int] = MappingProxyType(
    {
        "SOA": dns.rdatatype.SOA,
        "A": dns.rdatatype.A,
        "NS": dns.rdatatype.NS,
        "MX": dns.rdatatype.MX,
        "TXT": dns.rdatatype.TXT,
        "AAAA": dns.rdatatype.AAAA,
        "SRV": dns.rdatatype.SRV,
        "DS": dns.rdatatype.DS,
        "DNSKEY": dns.rdatatype.DNSKEY,
    }
)


def is_known_type(mnemonic: str) -> bool:
    """Check if a mnemonic is in the record type table.

    Args:
        mnemonic: Record type mnemonic, any case.

    Returns:
        bool: True if the uppercased mnemonic is recognized.

    Examples:
        >>> is_known_type("dnskey")
        True
        >>> is_known_type("PTR")
        False
    """
    return mnemonic.upper() in RECORD_TYPES


def resolve_type(mnemonic: str, default: str) -> Tuple[int, str]:
    """Map a record type mnemonic to its numeric type code.

    Unrecognized or empty mnemonics fall back to `default`, and the returned
    mnemonic is the one actually used.

    Args:
        mnemonic: Requested record type mnemonic, any case.
        default: Mnemonic used when the request is not recognized.

    Returns:
        Tuple[int, str]: (numeric type code, canonical mnemonic)

    Raises:
        ValueError: If `default` itself is not in the table.

    Examples:
        >>> resolve_type("mx", "NS")
        (<RdataType.MX: 15>, 'MX')
        >>> resolve_type("PTR", "NS")
        (<RdataType.NS: 2>, 'NS')
    """
    default = default.upper()
    if default not in RECORD_TYPES:
        raise ValueError(f"Unknown default record type: {default}")

    canonical = (mnemonic or "").strip().upper()
    if canonical not in RECORD_TYPES:
        canonical = default

    return RECORD_TYPES[canonical], canonical
