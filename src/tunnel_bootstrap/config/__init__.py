"""Configuration for tunnel-bootstrap: runtime settings and CLI messages."""
