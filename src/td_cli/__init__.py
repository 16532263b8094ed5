"""td - a local task manager with views, projects and undo."""

__version__ = "0.1.0"
