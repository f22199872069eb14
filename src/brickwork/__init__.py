"""Command line front end for the brick-pattern tessellation engine."""
