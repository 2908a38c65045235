"""Application layer - setup engine, builders and service facades."""
