"""Content parsers."""
