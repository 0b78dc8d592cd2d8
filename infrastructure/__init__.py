"""Infrastructure adapters: configuration, logging, storage and wiring."""
