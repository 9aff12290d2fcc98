"""
Category bidding policies: flight, hotel, entertainment.
"""
from tacbot.policy.base import BidDecision, BiddingPolicy, PolicyContext
from tacbot.policy.entertainment_policy import EntertainmentPolicy
from tacbot.policy.flight_policy import FlightPolicy
from tacbot.policy.hotel_policy import HotelPolicy

__all__ = [
    "BidDecision",
    "BiddingPolicy",
    "PolicyContext",
    "EntertainmentPolicy",
    "FlightPolicy",
    "HotelPolicy",
]
