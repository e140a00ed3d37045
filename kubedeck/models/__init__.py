"""Data models for KubeDeck TUI."""
