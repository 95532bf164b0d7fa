"""Registry, chunks, bundles, and relocation."""
