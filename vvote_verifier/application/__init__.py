"""Application layer: ports and the orchestrating verification services."""
