"""Kardex transcript ingestion against the academic catalog."""
