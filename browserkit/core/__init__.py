"""Session lifecycle, registry, window/page control and wait engine."""
