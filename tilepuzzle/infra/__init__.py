"""Infrastructure adapters: config, logging, paths, rasters."""
