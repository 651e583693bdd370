"""Command-line interface for digiledger."""
