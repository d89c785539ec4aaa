"""HTTP API serving attention metrics over stored scan events."""
