"""Infrastructure adapters: logging and conversation persistence."""
