"""Storefront Proxy — simplified local routes over the VTEX catalog, pricing and checkout APIs.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
