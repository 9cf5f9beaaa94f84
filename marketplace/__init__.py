"""
Artist Booking Marketplace.

Job posting, proposal bidding and review service connecting clients with
henna artists.
"""

__version__ = "0.1.0"
__description__ = "Artist Booking Marketplace"
