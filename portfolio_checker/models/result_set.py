"""Bounded collection of check results built by one batch run."""

from collections import Counter
from typing import Iterator, List

from portfolio_checker.models.check_result import CheckResult, CheckStatus


DEFAULT_LIMIT = 10000


def result_sort_key(result: CheckResult) -> str:
    """Sort key for report output.

    Plain string order on the status: "" < "bogus" < "insecure" < "secure",
    which puts bogus domains ahead of every validated domain.

    Args:
        result: Result to order.

    Returns:
        str: The status string.
    """
    return result.status.value


class ResultSet:
    """Ordered results of one batch run.

    Attributes:
        limit: Item count the batch may exceed by one before stopping.
        truncated: Set when input was cut off at the limit.
    """

    def __init__(self, limit: int = DEFAULT_LIMIT):
        if limit < 1:
            raise ValueError("limit must be at least 1")

        self.limit = limit
        self.truncated = False
        self._results: List[CheckResult] = []

    def append(self, result: CheckResult) -> None:
        self._results.append(result)

    def over_limit(self) -> bool:
        """Check if more than `limit` results were collected.

        Returns:
            bool: True once the count is strictly greater than the limit.
        """
        return len(self._results) > self.limit

    def sort(self) -> None:
        """Sort results in place, keeping input order among equal statuses."""
        self._results.sort(key=result_sort_key)

    def status_counts(self) -> dict[str, int]:
        """Count results per status.

        Returns:
            dict[str, int]: Counts keyed by lowercase status name ("unset",
                "bogus", "insecure", "secure"), zero counts included.
        """
        counts = Counter(r.status for r in self._results)
        return {status.name.lower(): counts.get(status, 0) for status in CheckStatus}

    def __iter__(self) -> Iterator[CheckResult]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)
