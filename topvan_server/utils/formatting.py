"""pt-BR display helpers."""


def format_currency(value) -> str:
    """Format a number as Brazilian reais, e.g. 1234.5 -> 'R$ 1.234,50'."""
    amount = float(value or 0)
    sign = '-' if amount < 0 else ''
    # build with US separators then swap them
    us = f'{abs(amount):,.2f}'
    br = us.replace(',', '_').replace('.', ',').replace('_', '.')
    return f'{sign}R$ {br}'

