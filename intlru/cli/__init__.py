"""Command line tools for intlru."""
