"""Subcommands registered on the root `bo` app."""
