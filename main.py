#!/usr/bin/env python3
"""
DNS Record Reconciler - Main Entry Point

This is the main entry point for the DNS Record Reconciler.
It can be run directly or imported as a module.
"""

from dns_record_reconciler.cli.main import main

if __name__ == "__main__":
    main()
