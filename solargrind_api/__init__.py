"""HTTP service for the Solar Grind quote calculator."""
