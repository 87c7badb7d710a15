"""
Auction House

Escrowed English auctions for unique digital assets:
- Reserve prices and percentage bid increments
- Escrow with full refund of outbid bidders
- Anti-snipe end extension
- Basis-point royalty settlement
"""

__version__ = "0.1.0"
