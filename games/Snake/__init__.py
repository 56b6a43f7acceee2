"""Snake - classic grid snake."""
