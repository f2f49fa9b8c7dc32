"""Typer command-line console."""
