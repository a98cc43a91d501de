"""Infrastructure layer: data store adapters and observability."""
