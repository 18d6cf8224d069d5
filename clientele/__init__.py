"""Clientele: customer-account persistence core.

Coordinates customer identities held by an external identity provider with
customer, membership and product price adjustment entities held in a
hierarchical document store.
"""

__version__ = "0.1.0"
