"""Configuration module for Portfolio Checker.

Loads and validates environment variables.
"""

import ipaddress
import os
from dataclasses import dataclass
from typing import List

from portfolio_checker.models.result_set import DEFAULT_LIMIT
from portfolio_checker.utils.record_types import is_known_type


REPORT_FORMATS = ("csv", "json", "yaml")


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Resolver Configuration
    resolver_nameservers: List[str]
    resolver_port: int
    dns_timeout: int

    # Check Configuration
    batch_limit: int
    batch_default_type: str
    lookup_default_type: str

    # Output Configuration
    report_format: str
    audit_syslog_address: str | None

    # Operational Configuration
    verbose: bool

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If variables are invalid.

        Returns:
            Config: Validated configuration instance.
        """
        # Resolver Configuration (empty list means use the system resolver)
        nameservers_str = os.getenv("RESOLVER_NAMESERVERS", "")
        resolver_nameservers = [
            ns.strip() for ns in nameservers_str.split(",") if ns.strip()
        ]
        for nameserver in resolver_nameservers:
            try:
                ipaddress.ip_address(nameserver)
            except ValueError:
                raise ValueError(
                    f"RESOLVER_NAMESERVERS contains an invalid IP address: {nameserver}"
                )

        resolver_port = int(os.getenv("RESOLVER_PORT", "53"))
        if not 1 <= resolver_port <= 65535:
            raise ValueError("RESOLVER_PORT must be between 1 and 65535")

        dns_timeout = int(os.getenv("DNS_TIMEOUT", "5"))
        if not 1 <= dns_timeout <= 60:
            raise ValueError("DNS_TIMEOUT must be between 1 and 60 seconds")

        # Check Configuration
        batch_limit = int(os.getenv("BATCH_LIMIT", str(DEFAULT_LIMIT)))
        if batch_limit < 1:
            raise ValueError("BATCH_LIMIT must be at least 1")

        batch_default_type = os.getenv("BATCH_DEFAULT_TYPE", "NS").strip().upper()
        if not is_known_type(batch_default_type):
            raise ValueError(
                f"BATCH_DEFAULT_TYPE must be a supported record type, got {batch_default_type!r}"
            )

        lookup_default_type = os.getenv("LOOKUP_DEFAULT_TYPE", "A").strip().upper()
        if not is_known_type(lookup_default_type):
            raise ValueError(
                f"LOOKUP_DEFAULT_TYPE must be a supported record type, got {lookup_default_type!r}"
            )

        # Output Configuration
        report_format = os.getenv("REPORT_FORMAT", "csv").strip().lower()
        if report_format not in REPORT_FORMATS:
            raise ValueError(
                f"REPORT_FORMAT must be one of {', '.join(REPORT_FORMATS)}"
            )

        audit_syslog_address = os.getenv("AUDIT_SYSLOG_ADDRESS") or None

        # Operational Configuration
        verbose_str = os.getenv("VERBOSE", "false").lower()
        verbose = verbose_str in ("true", "1", "yes")

        return cls(
            resolver_nameservers=resolver_nameservers,
            resolver_port=resolver_port,
            dns_timeout=dns_timeout,
            batch_limit=batch_limit,
            batch_default_type=batch_default_type,
            lookup_default_type=lookup_default_type,
            report_format=report_format,
            audit_syslog_address=audit_syslog_address,
            verbose=verbose,
        )
