"""Typer application for the `bo` command."""
