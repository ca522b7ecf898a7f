"""Developer tools for Hexbloop."""
