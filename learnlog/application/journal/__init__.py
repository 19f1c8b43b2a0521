"""Journal application layer: themes, learning logs and meta notes."""
