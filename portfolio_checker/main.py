"""Main entry point for Portfolio Checker."""

import argparse
import io
import logging
import sys
import time
from typing import List, Optional, TextIO

from portfolio_checker.config import REPORT_FORMATS, Config
from portfolio_checker.models.result_set import ResultSet
from portfolio_checker.services.batch_runner import BatchRunner
from portfolio_checker.services.classifier import DomainClassifier
from portfolio_checker.services.logger import (
    log_batch_summary,
    log_check_result,
    setup_audit_log,
    setup_logging,
)
from portfolio_checker.services.report_serializer import ReportSerializer
from portfolio_checker.services.resolver import ResolveFn, resolver_context
from portfolio_checker.utils.batch_source import MalformedInput, open_domain_source


logger = logging.getLogger(__name__)


def check_domain(
    name: str,
    type_mnemonic: str,
    resolve: ResolveFn,
    config: Config,
    out: TextIO,
    audit_logger: logging.Logger,
) -> int:
    """Check a single domain and write its report row.

    Args:
        name: Domain name to check.
        type_mnemonic: Requested record type, may be empty.
        resolve: Resolver collaborator.
        config: Application configuration.
        out: Destination for the CSV row.
        audit_logger: Audit logger.

    Returns:
        int: Exit code (always 0, failures are part of the row).
    """
    classifier = DomainClassifier(
        resolve, default_type=config.lookup_default_type, logger=logger
    )
    result = classifier.classify(name, type_mnemonic)
    log_check_result(audit_logger, result, source="cli")
    ReportSerializer.write_csv([result], out)
    return 0


def render_report(results: ResultSet, report_format: str, out: TextIO) -> None:
    """Write a batch report in the requested format."""
    if report_format == "json":
        out.write(ReportSerializer.generate_json_report(results) + "\n")
    elif report_format == "yaml":
        out.write(ReportSerializer.generate_yaml_report(results))
    else:
        ReportSerializer.write_csv(results, out)


def check_batch(
    stream: TextIO,
    source: str,
    resolve: ResolveFn,
    config: Config,
    out: TextIO,
    audit_logger: logging.Logger,
    report_format: str,
) -> int:
    """Check every domain of an uploaded list and write the sorted report.

    Args:
        stream: Uploaded domain list (text or CSV).
        source: Name of the upload, recorded in audit entries.
        resolve: Resolver collaborator.
        config: Application configuration.
        out: Destination for the report.
        audit_logger: Audit logger.
        report_format: One of csv, json, yaml.

    Returns:
        int: Exit code (0 for a report, 1 for malformed input).
    """
    start_time = time.time()

    try:
        names = open_domain_source(stream)
    except MalformedInput as e:
        logger.error(str(e), extra={"source": source})
        out.write(f"{e}\n")
        return 1

    classifier = DomainClassifier(
        resolve, default_type=config.batch_default_type, logger=logger
    )
    runner = BatchRunner(
        classifier, cap=config.batch_limit, logger=logger, audit_logger=audit_logger
    )
    results = runner.run(names, source=source)

    render_report(results, report_format, out)

    log_batch_summary(
        logger,
        total_domains=len(results),
        truncated=results.truncated,
        status_counts=results.status_counts(),
        duration_sec=time.time() - start_time,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portfolio-checker",
        description="Check the DNSSEC status of domain names",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Check a single domain")
    check_parser.add_argument("domain", help="Domain name to check")
    check_parser.add_argument(
        "type",
        nargs="?",
        default="",
        help="Record type to query (SOA, A, NS, MX, TXT, AAAA, SRV, DS, DNSKEY)",
    )

    batch_parser = subparsers.add_parser(
        "batch", help="Check a list of domains (one per line or CSV)"
    )
    batch_parser.add_argument("file", help="Domain list file, '-' for stdin")
    batch_parser.add_argument(
        "--format",
        choices=REPORT_FORMATS,
        default=None,
        help="Report format (default: REPORT_FORMAT or csv)",
    )

    return parser


def open_upload(path: str) -> TextIO:
    if path == "-":
        return io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", newline="")
    return open(path, "r", encoding="utf-8", newline="")


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        int: Exit code (0 for success, 1 for malformed input or fatal error).
    """
    args = build_parser().parse_args(argv)

    setup_logging()

    try:
        config = Config.from_env()
        if config.verbose:
            setup_logging(verbose=True)

        audit_logger, audit_listener = setup_audit_log(config.audit_syslog_address)
        try:
            with resolver_context(config) as resolve:
                if args.command == "check":
                    logger.info(f"Single lookup request for {args.domain}")
                    return check_domain(
                        args.domain,
                        args.type,
                        resolve,
                        config,
                        sys.stdout,
                        audit_logger,
                    )

                logger.info(f"Batch request from {args.file}")
                try:
                    upload = open_upload(args.file)
                except OSError as e:
                    logger.error(f"Error opening CSV: {e}")
                    sys.stdout.write(f"Error opening CSV: {e}\n")
                    return 1

                with upload:
                    return check_batch(
                        upload,
                        args.file,
                        resolve,
                        config,
                        sys.stdout,
                        audit_logger,
                        args.format or config.report_format,
                    )
        finally:
            audit_listener.stop()

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
