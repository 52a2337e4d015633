"""Infrastructure layer: record store backends and token verification."""
