"""Galaxy map, session state and turn progression."""
