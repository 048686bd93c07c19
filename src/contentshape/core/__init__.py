"""Core: content models, configuration, errors and logging."""
