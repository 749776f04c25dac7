"""Typer command-line interface for zonedtime."""
