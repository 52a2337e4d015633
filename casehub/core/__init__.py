"""Core: configuration, lifespan, exception handlers and session registry."""
