"""Marketing-site content element engines."""
