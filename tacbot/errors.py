"""
Errors raised by tacbot.

Only load-time problems (configuration, preferences, auction ids) raise.
Everything on the event path is caught and logged by the engine.
"""

from __future__ import annotations


class TacbotError(Exception):
    """Base class for all tacbot errors."""


class UnknownAuctionError(TacbotError, KeyError):
    """Auction id or (category, type, day) outside the catalog."""


class PreferenceError(TacbotError, ValueError):
    """Client preferences that cannot describe a valid trip."""


class ConfigError(TacbotError, ValueError):
    """Invalid agent configuration."""
