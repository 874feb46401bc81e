"""Calculator compositions of the projection engine."""
