"""Batch runner for checking domain portfolios."""

import logging
from typing import Iterable, Optional

from portfolio_checker.models.result_set import DEFAULT_LIMIT, ResultSet
from portfolio_checker.services.classifier import DomainClassifier
from portfolio_checker.services.logger import log_check_result


class BatchRunner:
    """Checks a sequence of domain names with a hard item cap.

    Names are classified one at a time with the classifier's default type.
    Once more than `cap` names have been processed the run stops and the
    collected results are returned as usual; truncation is not an error.

    Attributes:
        cap: Number of items the run may exceed by one.
    """

    def __init__(
        self,
        classifier: DomainClassifier,
        cap: int = DEFAULT_LIMIT,
        logger: Optional[logging.Logger] = None,
        audit_logger: Optional[logging.Logger] = None,
    ):
        """Initialize batch runner.

        Args:
            classifier: Classifier used for every name.
            cap: Processing cap, `cap + 1` names are checked at most.
            logger: Logger for run progress (defaults to module logger).
            audit_logger: Logger receiving one record per checked domain.
        """
        self.classifier = classifier
        self.cap = cap
        self._logger = logger or logging.getLogger(__name__)
        self._audit_logger = audit_logger

    def run(self, names: Iterable[str], source: str = "") -> ResultSet:
        """Check every name until the input ends or the cap is exceeded.

        Args:
            names: Domain names, consumed lazily.
            source: Where the batch came from, recorded in audit entries.

        Returns:
            ResultSet: Results sorted for reporting.
        """
        results = ResultSet(limit=self.cap)

        for name in names:
            result = self.classifier.classify(name, self.classifier.default_type)
            if self._audit_logger is not None:
                log_check_result(self._audit_logger, result, source)
            results.append(result)

            if results.over_limit():
                self._logger.warning(
                    f"Batch limit of {self.cap} exceeded, ignoring remaining input"
                )
                results.truncated = True
                break

        results.sort()
        return results
