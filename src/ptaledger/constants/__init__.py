"""Static lookup tables shared across the app."""
