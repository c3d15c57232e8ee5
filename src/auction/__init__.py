"""Single-listing auction state machine with monetary settlement."""
