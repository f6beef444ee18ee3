"""HTTP API over the speedgraph payloads."""
