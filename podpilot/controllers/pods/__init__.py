"""Pod and context fetching, parsing and mutation."""
