"""pytest fixtures for testing."""

import pytest
from unittest.mock import Mock


@pytest.fixture
def mock_resolve():
    """Mock resolver collaborator answering secure for every query."""
    from portfolio_checker.models.resolver_answer import ResolverAnswer

    mock = Mock()
    mock.return_value = ResolverAnswer(have_data=True, secure=True, rcode=0)
    return mock


@pytest.fixture
def sample_results():
    """One result per status, in input order insecure, bogus, unset, secure."""
    from portfolio_checker.models.check_result import CheckResult, CheckStatus

    return [
        CheckResult(query_type="NS", name="insecure.nl", status=CheckStatus.INSECURE),
        CheckResult(
            query_type="NS",
            name="bogus.nl",
            status=CheckStatus.BOGUS,
            why="signature expired",
        ),
        CheckResult(query_type="NS", name="empty.nl", error_text="nodata"),
        CheckResult(query_type="NS", name="secure.nl", status=CheckStatus.SECURE),
    ]


@pytest.fixture
def make_config():
    """Factory for Config instances with test defaults."""
    from portfolio_checker.config import Config

    def factory(**overrides):
        values = {
            "resolver_nameservers": ["192.0.2.53"],
            "resolver_port": 53,
            "dns_timeout": 5,
            "batch_limit": 10000,
            "batch_default_type": "NS",
            "lookup_default_type": "A",
            "report_format": "csv",
            "audit_syslog_address": None,
            "verbose": False,
        }
        values.update(overrides)
        return Config(**values)

    return factory
