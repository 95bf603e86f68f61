"""Ledger, codecs and snapshot loading."""
