"""Ledger core for small shared-expense groups."""
