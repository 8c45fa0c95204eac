"""High-level workflows built on the storage layer."""
