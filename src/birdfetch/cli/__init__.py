"""Command line interface for birdfetch."""
