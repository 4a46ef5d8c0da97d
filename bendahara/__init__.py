"""Bendahara: a Telegram ledger bot for daily income and expenses."""

__version__ = "1.0.0"
