"""Infrastructure adapters: logging, file I/O and dependency wiring."""
