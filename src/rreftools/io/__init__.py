"""Matrix text input/output."""
