"""ANSI color constants shared by every console writer, via colorama."""

import colorama

colorama.init(autoreset=True)


class Color:
    """ANSI color constants."""

    RESET   = colorama.Style.RESET_ALL
    DIM     = colorama.Style.DIM
    BOLD    = colorama.Style.BRIGHT
    CYAN    = colorama.Fore.CYAN
    GREEN   = colorama.Fore.GREEN
    YELLOW  = colorama.Fore.YELLOW
    RED     = colorama.Fore.RED
    WHITE   = colorama.Fore.WHITE
    MAGENTA = colorama.Fore.MAGENTA
