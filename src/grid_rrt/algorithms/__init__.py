"""Planning algorithms."""
