"""CSV ingest helpers for raw and cleaned loan application files."""
