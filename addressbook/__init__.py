"""Terminal-based address book."""
