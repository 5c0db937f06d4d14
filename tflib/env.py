#
# A singleton environment for capturing global options.
#
# This controls how symbolic values render and a few defaults used by the
# transforms. While this can be used at the library level, it is primarily
# for interactive use and not thread safe.
#
from __future__ import annotations

from dataclasses  import dataclass, field

from rich.console import Console
from rich.theme   import Theme

bright_theme = Theme({
    "repr.number": "#3333cc",
    "repr.str": "#330066",
    "tf.numerator": "#009933",
    "tf.denominator": "#990033",
    "tf.power": "bold #333366",
    "markdown.code": "bold red on #cccccc",
})

dark_theme = Theme({
    "repr.number": "#cccc33",
    "repr.str": "#ccff99",
    "tf.numerator": "#66ffcc",
    "tf.denominator": "#ff66cc",
    "tf.power": "bold #cccc99",
    "markdown.code": "bold magenta on white",
})


@dataclass
class Environment:
    """Options governing rendering and transform defaults, globally available.
    """
    ascii_only: bool = False
    dark_mode: bool = False
    float_literals: bool = False
    rate_symbol: str = 'rate'
    console: Console = field(default_factory=lambda: Console(highlight=True, theme=bright_theme))

    def on_ascii_only(self) -> None:
        "Require ASCII-only output, no rich text, unicode, or markdown."
        self.ascii_only = True

    def off_ascii_only(self) -> None:
        "Allow non-ascii and rich output"
        self.ascii_only = False

    def on_dark_mode(self) -> None:
        "Changes text color to suit dark colored terminals"
        self.dark_mode = True
        self.console.push_theme(dark_theme)

    def on_bright_mode(self) -> None:
        "Text color default suited for light colored terminals"
        self.dark_mode = False
        self.console.push_theme(bright_theme)

    def on_float_literals(self) -> None:
        "Render integer weights as float literals (2.0), e.g., for pasting into DSP code."
        self.float_literals = True

    def off_float_literals(self) -> None:
        "Render integer weights as integers."
        self.float_literals = False

    def console_str(self, rich_str) -> str:
        "Renders through the console, returning the text that would be printed."
        with self.console.capture() as capture:
            self.console.print(rich_str)
        return capture.get()

environment = Environment()
