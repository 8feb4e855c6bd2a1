"""Small utilities: bit writing, byte iteration and padding, rationals, events, limiters, pipes, zip archives and shared memory."""

__version__ = "0.1.0"