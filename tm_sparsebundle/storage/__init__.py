"""Wrappers around the macOS disk image and Time Machine utilities."""
