#!/usr/bin/env python3
"""
DNS Record Reconciler - Demo Script

This script demonstrates the functionality of the DNS Record Reconciler
using the mock provider for safe testing and demonstration.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dns_record_reconciler.cli.output import render_outcomes
from dns_record_reconciler.core.record_manager import RecordManager
from dns_record_reconciler.providers.mock_provider import MockDNSProvider

console = Console()

DEMO_ZONE = "ZDEMO0000000000000000"

DEMO_RECORDS = [
    {"name": "web1.example.com", "type": "A", "ttl": 300, "value": ["10.33.1.10"]},
    {"name": "web2.example.com", "type": "A", "ttl": 300, "value": ["10.33.1.12", "10.33.1.11"]},
    {"name": "www.example.com", "type": "CNAME", "ttl": 300, "value": "web1.example.com"},
    {
        "name": "geo.example.com",
        "type": "A",
        "set_identifier": "geo-us",
        "geo_location_country": "US",
        "geo_location_continent": "NA",
        "value": "10.33.2.10",
    },
]

EXISTING_RECORDS = [
    {
        "name": "web1.example.com.",
        "type": "A",
        "ttl": 300,
        "resource_records": [{"value": "10.33.1.10"}],
    },
    {
        "name": "web2.example.com.",
        "type": "A",
        "ttl": 60,
        "resource_records": [{"value": "10.33.1.11"}],
    },
]


def display_demo_header():
    """Display the demo header."""
    console.print(
        Panel.fit(
            "[bold blue]DNS Record Reconciler - Demo[/bold blue]\n"
            "[cyan]Idempotent DNS record management against an in-memory zone[/cyan]",
            border_style="blue",
        )
    )
    console.print()


def display_zone(provider: MockDNSProvider):
    """Display the records currently held by the mock zone."""
    table = Table(title=f"Records in {DEMO_ZONE}")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("TTL", style="yellow")
    table.add_column("Values", style="magenta")

    for record in provider.records:
        values = ", ".join(rr["value"] for rr in record.get("resource_records", []))
        table.add_row(record["name"], record["type"], str(record.get("ttl", "")), values)

    console.print(table)
    console.print()


def main():
    display_demo_header()

    provider = MockDNSProvider(records=EXISTING_RECORDS)
    record_manager = RecordManager(provider)
    display_zone(provider)

    console.print("[bold]First pass:[/bold]")
    render_outcomes(record_manager.process_records(DEMO_RECORDS, DEMO_ZONE), console)
    console.print()
    display_zone(provider)

    console.print("[bold]Second pass (nothing left to change):[/bold]")
    render_outcomes(record_manager.process_records(DEMO_RECORDS, DEMO_ZONE), console)
    console.print()

    console.print("[bold]Deleting the declared records:[/bold]")
    render_outcomes(
        record_manager.process_records(DEMO_RECORDS, DEMO_ZONE, delete_records=True),
        console,
    )
    console.print()
    display_zone(provider)


if __name__ == "__main__":
    main()
