"""
Step definitions for DNS Record Reconciler integration tests.
"""

import yaml
from behave import given, then, when

from dns_record_reconciler.cli.main import load_config
from dns_record_reconciler.core.outcome import RunSummary
from dns_record_reconciler.core.record_manager import RecordManager
from dns_record_reconciler.exceptions import ProviderServiceError
from dns_record_reconciler.parsers.records_file import RecordsFileParser
from dns_record_reconciler.providers.dns_client import DNSClient
from dns_record_reconciler.providers.mock_provider import MockDNSProvider


def _split_values(cell):
    return [value.strip() for value in cell.split(",") if value.strip()]


@given("the DNS Record Reconciler is configured with the mock provider")
def step_impl(context):
    """Configure the reconciler with the mock provider."""
    context.dns_client = DNSClient(load_config(str(context.test_config_file)))
    context.provider = context.dns_client.provider
    context.record_manager = RecordManager(context.dns_client)
    assert isinstance(context.provider, MockDNSProvider)


@given("the zone holds the following records")
def step_impl(context):
    """Seed the mock zone."""
    context.provider.seed(
        [
            {
                "name": row["name"],
                "type": row["type"],
                "ttl": int(row["ttl"]),
                "resource_records": [{"value": v} for v in _split_values(row["values"])],
            }
            for row in context.table
        ]
    )


@given("I have a records file with")
def step_impl(context):
    """Write a records file from the table."""
    records = [
        {
            "name": row["name"],
            "type": row["type"],
            "ttl": int(row["ttl"]),
            "values": _split_values(row["values"]),
        }
        for row in context.table
    ]

    context.records_file = context.test_data_dir / "records.yaml"
    with open(context.records_file, "w") as f:
        yaml.dump({"zone_id": context.test_zone, "records": records}, f)


@given("the provider rejects the next change")
def step_impl(context):
    context.provider.fail_next_submit(
        ProviderServiceError("Rate exceeded", code="Throttling", operation="submit_change")
    )


def _process(context, delete_records=False):
    parser = RecordsFileParser(str(context.records_file))
    declarations = parser.parse()
    context.submitted_before = len(context.provider.submitted)
    context.outcomes = context.record_manager.process_records(
        declarations, parser.zone_id, delete_records=delete_records
    )


@when("I reconcile the records file")
def step_impl(context):
    _process(context)


@when("I reconcile the records file again")
def step_impl(context):
    _process(context)


@when("I delete the records in the records file")
def step_impl(context):
    _process(context, delete_records=True)


@then('the outcome for "{name}" is "{status}"')
def step_impl(context, name, status):
    """Check the outcome status of a record."""
    outcomes = [outcome for outcome in context.outcomes if outcome.name == name]
    assert outcomes, f"No outcome for {name}"
    assert outcomes[0].status.value == status, f"{name}: {outcomes[0].status.value} != {status}"


@then("no change should have been submitted")
def step_impl(context):
    assert len(context.provider.submitted) == context.submitted_before


@then('the zone should hold "{name}" with values "{values}"')
def step_impl(context, name, values):
    records = [record for record in context.provider.records if record["name"] == name]
    assert len(records) == 1, f"Expected one record set for {name}, found {len(records)}"
    actual = sorted(rr["value"] for rr in records[0]["resource_records"])
    assert actual == sorted(_split_values(values)), f"{name}: {actual}"


@then('the zone should not hold "{name}"')
def step_impl(context, name):
    assert not any(record["name"] == name for record in context.provider.records)


@then("the run summary should count {count:d} warning")
def step_impl(context, count):
    summary = RunSummary.from_outcomes(context.outcomes)
    assert summary.warnings == count, f"warnings: {summary.warnings}"
