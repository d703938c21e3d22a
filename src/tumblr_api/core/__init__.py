"""Cross-cutting concerns: exception hierarchy and logging configuration."""
