"""Per-day group availability calendar: model, edits, and persistence."""
