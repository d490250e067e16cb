"""Services Layer — aggregating fetcher plus catalog and checkout operations.

Invariants:
    - Services receive the VtexClient explicitly
    - Primary fetch failures raise UpstreamPrimaryError; enrichment failures become item data
"""
