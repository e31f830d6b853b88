"""Answer returned by the validating resolver."""

from dataclasses import dataclass


@dataclass
class ResolverAnswer:
    """Validated answer for one (name, type, class) query.

    Attributes:
        have_data: Answer section holds records of the queried type.
        secure: Validation succeeded (chain of trust verified).
        bogus: Validation was attempted and failed.
        why_bogus: Validator explanation, non-empty when bogus is set.
        nx_domain: The queried name does not exist.
        rcode: DNS response code of the answer.
    """

    have_data: bool = False
    secure: bool = False
    bogus: bool = False
    why_bogus: str = ""
    nx_domain: bool = False
    rcode: int = 0
