import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from revisao.config import LOG_LEVEL

_console = Console()
_configured = False

def info(msg: str):
    _console.print(Text(msg, style="bold cyan"))

def warn(msg: str):
    _console.print(Text(msg, style="bold yellow"))

def error(msg: str):
    _console.print(Text(msg, style="bold red"))

def get_logger(name: str) -> logging.Logger:
    """Logger do pacote com saída via RichHandler (configurado uma única vez)."""
    global _configured
    if not _configured:
        root = logging.getLogger("revisao")
        root.setLevel(LOG_LEVEL)
        handler = RichHandler(console=_console, rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.propagate = False
        _configured = True
    return logging.getLogger(name)
