"""Application – the generic cache contract and backend-independent policies."""
