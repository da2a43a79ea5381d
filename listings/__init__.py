"""Listings API: multi-tenant product and construction catalog backend."""
