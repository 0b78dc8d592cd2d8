"""Application layer: ports, resolution services and use cases."""
