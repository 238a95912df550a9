"""Core configuration loading, environment merge and error types."""
