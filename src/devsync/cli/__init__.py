"""CLI for devsync."""
