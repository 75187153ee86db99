"""Menu items and their per-item loyalty earning rules."""
