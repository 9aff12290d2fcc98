"""
Auction identity and quote bookkeeping.
"""
