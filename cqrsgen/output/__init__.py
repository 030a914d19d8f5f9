"""Output layer: source emission and diagnostics formatting."""
