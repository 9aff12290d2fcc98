"""
tacbot package
--------------
Allocation planning and adaptive bidding for a travel agent trading in
flight, hotel and entertainment auctions on behalf of eight clients.
"""

__version__ = "0.4.0"
