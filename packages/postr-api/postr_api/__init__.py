"""
Postr API

REST (/api) and GraphQL (/graphql) server on top of the postr core library.
"""

__version__ = "0.1.0"
