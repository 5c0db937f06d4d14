# output.py - tools for managing terminal output

from __future__ import annotations

from typing            import Literal

from rich              import box
from rich.panel        import Panel
from rich.table        import Table

from tflib.env         import environment

#
# Rendered Output
#

def in_panel(
        s: str,
        box=box.SQUARE,
        title: str | None = None,
        title_align: Literal['left', 'center', 'right'] = 'center',
        subtitle: str | None = None,
        subtitle_align: Literal['left', 'center', 'right'] = 'center',
) -> str | Panel:
    if environment.ascii_only:
        return s
    return Panel(
        s,
        expand=False,
        box=box,
        title=title,
        title_align=title_align,
        subtitle=subtitle,
        subtitle_align=subtitle_align,
    )


#
# Coefficient Tables
#

def coefficient_rows(tf) -> list[tuple[str, str, str]]:
    "Rows of (power, numerator, denominator) strings, one per power of the transform variable."
    var = tf.domain.variable
    width = max(len(tf.numerator), len(tf.denominator))
    rows = []
    for i in range(width):
        b = str(tf.numerator[i]) if i < len(tf.numerator) else ''
        a = str(tf.denominator[i]) if i < len(tf.denominator) else ''
        rows.append((f'{var}^{i}', b, a))
    return rows

def coefficient_table(tf, title: str | None = None) -> str | Table:
    """Tabulates the numerator and denominator coefficients of a transfer function by power.

    With `environment.ascii_only` this returns plain text with one row per power.

    """
    rows = coefficient_rows(tf)
    if environment.ascii_only:
        lines = [title] if title else []
        lines.extend(f'{p}: b = {b or "-"}, a = {a or "-"}' for p, b, a in rows)
        return '\n'.join(lines)

    table = Table(title=title, box=box.SIMPLE_HEAD)
    table.add_column('Power', justify='right', style='tf.power')
    table.add_column('Numerator', style='tf.numerator')
    table.add_column('Denominator', style='tf.denominator')
    for row in rows:
        table.add_row(*row)
    return table

