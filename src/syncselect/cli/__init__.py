"""Command-line interface for syncselect."""
