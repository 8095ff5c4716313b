"""Calling layer: settings, structured logging and the command line."""
