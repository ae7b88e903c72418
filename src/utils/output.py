"""Utility functions for formatted CLI output."""

from typing import Any

import click

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}


def format_currency(value: float, currency: str = "EUR", decimals: int = 2) -> str:
    """Format an amount with its currency symbol (or code when no symbol is known).

    Args:
        value: Amount
        currency: ISO currency code
        decimals: Number of decimals

    Returns:
        Formatted amount, e.g. '€1,234.56' or 'CHF 1,234.56'
    """
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    amount = f"{value:,.{decimals}f}"
    if symbol:
        return f"{symbol}{amount}"
    return f"{currency.upper()} {amount}"


def print_header(title: str, width: int = 70, color: str = "cyan") -> None:
    """Print a formatted header.

    Args:
        title: Header title
        width: Header width
        color: Header color
    """
    click.echo()
    click.echo(click.style("=" * width, fg=color))
    click.echo(click.style(title, fg=color, bold=True))
    click.echo(click.style("=" * width, fg=color))
    click.echo()


def print_section(title: str, color: str = "yellow") -> None:
    """Print a section title."""
    click.echo(click.style(f"\n{title}:", fg=color, bold=True))


def print_key_value(
    key: str, value: Any, key_color: str = "white", value_color: str = "cyan"
) -> None:
    """Print a key-value pair.

    Args:
        key: Key name
        value: Value
        key_color: Key color
        value_color: Value color
    """
    click.echo(
        click.style(f"  {key}: ", fg=key_color) + click.style(str(value), fg=value_color, bold=True)
    )


def print_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style(f"⚠ {message}", fg="yellow", bold=True))


def print_table(
    headers: list[str],
    rows: list[list[Any]],
    header_color: str = "cyan",
    align_right: bool = False,
) -> None:
    """Print a formatted table.

    Args:
        headers: Table headers
        rows: Table rows
        header_color: Header color
        align_right: Right-align every column except the first (for amounts)
    """
    if not rows:
        return

    col_widths = [len(str(h)) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(str(cell)))

    def _cell(value: Any, i: int) -> str:
        if align_right and i > 0:
            return str(value).rjust(col_widths[i])
        return str(value).ljust(col_widths[i])

    header_row = " | ".join(_cell(h, i) for i, h in enumerate(headers))
    click.echo(click.style(header_row, fg=header_color, bold=True))
    click.echo(click.style("-" * len(header_row), dim=True))

    for row in rows:
        click.echo(" | ".join(_cell(cell, i) for i, cell in enumerate(row)))
