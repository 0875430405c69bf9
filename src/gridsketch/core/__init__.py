"""Shape geometry, placement validation and the shape registry."""
