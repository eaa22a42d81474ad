"""
goaguide
--------
Budget-constrained itinerary scheduler for multi-day Goa trips.
"""

__version__ = "1.0.0"
