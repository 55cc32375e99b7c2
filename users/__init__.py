"""
users — read-only profile listing.
"""
