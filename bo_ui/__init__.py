"""Command-line front end for the table engine."""
