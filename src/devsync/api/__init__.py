"""HTTP API for devsync."""
