"""Test factories for generating test data.

Requires polyfactory, installed with the ``test`` extra
(``pip install run-report-notifier[test]``).
"""

from polyfactory import Use
from polyfactory.factories import DataclassFactory
from polyfactory.factories.pydantic_factory import ModelFactory
from pydantic import SecretStr

from run_report_notifier.config import LaunchServiceConfig, NotifierConfig
from run_report_notifier.models.event import TestOutcomeEvent
from run_report_notifier.models.summary import OutcomeCounts


class TestOutcomeEventFactory(DataclassFactory[TestOutcomeEvent]):
    """Factory for TestOutcomeEvent."""

    __test__ = False
    __model__ = TestOutcomeEvent

    start_time = Use(
        DataclassFactory.__random__.randint, 1_700_000_000_000, 1_800_000_000_000
    )


class OutcomeCountsFactory(DataclassFactory[OutcomeCounts]):
    """Factory for OutcomeCounts."""

    __model__ = OutcomeCounts

    expected = Use(DataclassFactory.__random__.randint, 0, 50)
    unexpected = Use(DataclassFactory.__random__.randint, 0, 50)
    flaky = Use(DataclassFactory.__random__.randint, 0, 50)
    skipped = Use(DataclassFactory.__random__.randint, 0, 50)


class LaunchServiceConfigFactory(ModelFactory[LaunchServiceConfig]):
    """Factory for LaunchServiceConfig."""

    endpoint = "http://reportportal.test/api/v1"
    api_key = SecretStr("rp-api-key")
    project = "demo_project"


class NotifierConfigFactory(ModelFactory[NotifierConfig]):
    """Factory for NotifierConfig."""

    webhook_url = "http://webhook.test/hooks/run-report"
    environment = "https://staging.example.com"
    timezone = "Europe/Amsterdam"
    launch_service = Use(LaunchServiceConfigFactory.build)
