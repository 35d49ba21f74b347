"""Single-player snake with power-ups, combos and obstacle hazards."""
