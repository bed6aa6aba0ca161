"""Top-level package for the walking tour resolver.

Turns a free-text tour request into a verified, ordered itinerary:
places proposed by a generative model are resolved against a place
search service, scored, filtered, re-sequenced along the optimal route
and linked to a navigation deep link.
"""

__version__ = "0.1.0"
