"""
                Smokey Restaurant API

Menu browsing, session-scoped shopping carts and order placement/tracking
for a single restaurant storefront.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
