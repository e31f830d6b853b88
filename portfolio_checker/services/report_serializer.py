"""Report serialization for check results.

Single lookups and batches share one row shape:
name, error text, security status, bogus explanation.
"""

import csv
import io
import json
from typing import Iterable, Iterator, List, Optional, TextIO

import yaml

from portfolio_checker.models.check_result import CheckResult, CheckStatus
from portfolio_checker.models.result_set import ResultSet


COLUMNS = ("name", "error", "status", "why")


class ReportSerializer:
    """Renders check results as CSV, JSON or YAML reports.

    Provides static methods, the CSV form being the primary output.
    """

    @staticmethod
    def serialize(result: Optional[CheckResult]) -> Optional[List[str]]:
        """Flatten a result into a report row.

        Args:
            result: Result to flatten, may be None.

        Returns:
            Optional[List[str]]: [name, error_text, status, why], or None for
                a missing result (callers skip the row).

        Example:
            >>> ReportSerializer.serialize(
            ...     CheckResult(name="example.nl", status=CheckStatus.SECURE)
            ... )
            ['example.nl', '', 'secure', '']
        """
        if result is None:
            return None
        return [result.name, result.error_text, result.status.value, result.why]

    @staticmethod
    def serialize_batch(results: Iterable[Optional[CheckResult]]) -> Iterator[List[str]]:
        """Flatten results into rows, skipping missing results."""
        for result in results:
            row = ReportSerializer.serialize(result)
            if row is not None:
                yield row

    @staticmethod
    def write_csv(results: Iterable[Optional[CheckResult]], stream: TextIO) -> None:
        """Write results as consecutive CSV rows.

        Args:
            results: Results in report order.
            stream: Destination text stream.
        """
        writer = csv.writer(stream, lineterminator="\n")
        writer.writerows(ReportSerializer.serialize_batch(results))

    @staticmethod
    def generate_csv_report(results: Iterable[Optional[CheckResult]]) -> str:
        buffer = io.StringIO()
        ReportSerializer.write_csv(results, buffer)
        return buffer.getvalue()

    @staticmethod
    def parse_csv(text: str) -> List[CheckResult]:
        """Read a CSV report back into results.

        The query type is not part of the report and stays empty.

        Args:
            text: CSV report with four columns per row.

        Returns:
            List[CheckResult]: Results in report order.

        Raises:
            ValueError: If a row does not have four columns or has an
                unknown status.
        """
        results = []
        for row in csv.reader(io.StringIO(text)):
            if len(row) != len(COLUMNS):
                raise ValueError(f"Expected {len(COLUMNS)} columns, got {len(row)}")
            name, error_text, status, why = row
            results.append(
                CheckResult(
                    name=name,
                    error_text=error_text,
                    status=CheckStatus(status),
                    why=why,
                )
            )
        return results

    @staticmethod
    def to_json(results: ResultSet) -> dict:
        """Build the JSON-compatible batch report.

        Args:
            results: Sorted result set.

        Returns:
            dict: Report with "results" rows and a "summary" block.
        """
        return {
            "results": [
                dict(
                    zip(COLUMNS, ReportSerializer.serialize(result)),
                    query_type=result.query_type,
                )
                for result in results
            ],
            "summary": {
                "total_domains": len(results),
                "truncated": results.truncated,
                "limit": results.limit,
                "status_counts": results.status_counts(),
            },
        }

    @staticmethod
    def generate_json_report(results: ResultSet) -> str:
        """Generate JSON-formatted batch report.

        Returns:
            str: Pretty-printed JSON string with sorted keys for determinism.
        """
        return json.dumps(ReportSerializer.to_json(results), indent=2, sort_keys=True)

    @staticmethod
    def generate_yaml_report(results: ResultSet) -> str:
        """Generate YAML-formatted batch report.

        Returns:
            str: YAML document with results kept in report order.
        """
        return yaml.safe_dump(
            ReportSerializer.to_json(results),
            default_flow_style=False,
            sort_keys=False,
        )
