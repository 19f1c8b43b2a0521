"""Journal domain: themes, daily learning logs and meta notes."""
