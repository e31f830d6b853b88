"""Validating resolver adapter.

Asks an upstream DNSSEC-validating recursive resolver and reads its verdict
from the response. Signatures are never verified locally; the trust anchor
is whatever the upstream resolver is configured with.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Generator, List

import dns.edns
import dns.exception
import dns.flags
import dns.message
import dns.query
import dns.rcode
import dns.rdataclass
import dns.rdatatype
import dns.resolver

from portfolio_checker.config import Config
from portfolio_checker.models.resolver_answer import ResolverAnswer


logger = logging.getLogger(__name__)

# (name, numeric type, numeric class) -> answer, raises TransportError
ResolveFn = Callable[[str, int, int], ResolverAnswer]


class TransportError(Exception):
    """The query could not be built, sent or answered."""


def extract_bogus_reason(response: dns.message.Message) -> str:
    """Collect Extended DNS Errors (RFC 8914) from a response.

    Args:
        response: Response from the validating resolver.

    Returns:
        str: EDE options joined with "; ", empty if there are none.
    """
    return "; ".join(
        option.to_text()
        for option in response.options
        if isinstance(option, dns.edns.EDEOption)
    )


class ValidatingResolver:
    """Resolves names through an upstream validating resolver.

    A SERVFAIL answer is retried once with the CD (checking disabled) flag.
    If the unchecked answer is NOERROR or NXDOMAIN the upstream rejected the
    data during validation, so the answer is reported bogus.

    Attributes:
        nameservers: Upstream resolver addresses, tried in order.
        port: Upstream resolver port.
        timeout: Per-nameserver query timeout in seconds.
    """

    def __init__(self, nameservers: List[str], port: int = 53, timeout: int = 5):
        if not nameservers:
            raise ValueError("at least one nameserver is required")

        self.nameservers = list(nameservers)
        self.port = port
        self.timeout = timeout
        self._closed = False

    def close(self) -> None:
        self._closed = True

    def resolve(
        self, name: str, rdtype: int, rdclass: int = dns.rdataclass.IN
    ) -> ResolverAnswer:
        """Resolve one name and report its validation state.

        Args:
            name: Domain name to query.
            rdtype: Numeric record type.
            rdclass: Numeric record class.

        Returns:
            ResolverAnswer: Validated answer.

        Raises:
            TransportError: If no nameserver answered or the name is invalid.
        """
        response = self._exchange(name, rdtype, rdclass)

        if response.rcode() == dns.rcode.SERVFAIL:
            unchecked = self._exchange(name, rdtype, rdclass, checking_disabled=True)
            if unchecked.rcode() in (dns.rcode.NOERROR, dns.rcode.NXDOMAIN):
                why_bogus = extract_bogus_reason(response) or (
                    f"validation failure <{name} {dns.rdatatype.to_text(rdtype)} "
                    f"{dns.rdataclass.to_text(rdclass)}>"
                )
                return self._to_answer(
                    unchecked, rdtype, bogus=True, why_bogus=why_bogus
                )

        return self._to_answer(response, rdtype)

    def _exchange(
        self,
        name: str,
        rdtype: int,
        rdclass: int,
        checking_disabled: bool = False,
    ) -> dns.message.Message:
        if self._closed:
            raise TransportError("resolver context is closed")

        try:
            query = dns.message.make_query(name, rdtype, rdclass, want_dnssec=True)
        except (dns.exception.DNSException, ValueError) as e:
            raise TransportError(str(e) or type(e).__name__) from e

        query.flags |= dns.flags.AD
        if checking_disabled:
            query.flags |= dns.flags.CD

        last_error: Exception | None = None
        for nameserver in self.nameservers:
            try:
                response, _ = dns.query.udp_with_fallback(
                    query, nameserver, timeout=self.timeout, port=self.port
                )
                return response
            # EOFError: TCP fallback connection closed before a full answer
            except (dns.exception.DNSException, OSError, EOFError) as e:
                logger.debug(f"Nameserver {nameserver} failed for {name}: {e}")
                last_error = e

        raise TransportError(str(last_error) or type(last_error).__name__)

    @staticmethod
    def _to_answer(
        response: dns.message.Message,
        rdtype: int,
        bogus: bool = False,
        why_bogus: str = "",
    ) -> ResolverAnswer:
        rcode = response.rcode()
        return ResolverAnswer(
            have_data=any(rrset.rdtype == rdtype for rrset in response.answer),
            secure=not bogus and bool(response.flags & dns.flags.AD),
            bogus=bogus,
            why_bogus=why_bogus,
            nx_domain=rcode == dns.rcode.NXDOMAIN,
            rcode=rcode,
        )


@contextmanager
def resolver_context(config: Config) -> Generator[ResolveFn, None, None]:
    """Open a resolver for one request and release it on every exit path.

    Args:
        config: Application configuration.

    Yields:
        ResolveFn: Bound resolve function of the opened resolver.
    """
    nameservers = config.resolver_nameservers or dns.resolver.Resolver().nameservers
    resolver = ValidatingResolver(
        nameservers, port=config.resolver_port, timeout=config.dns_timeout
    )
    logger.debug(
        "Resolver context opened",
        extra={"nameservers": resolver.nameservers, "port": resolver.port},
    )
    try:
        yield resolver.resolve
    finally:
        resolver.close()
        logger.debug("Resolver context released")
