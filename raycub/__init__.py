"""Grid ray-casting maze explorer: .cub scene parsing, map checks, rendering and a pygame window."""

__version__ = "0.1.0"