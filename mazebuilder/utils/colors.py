"""Colored terminal output for the mazebuilder command line."""

import sys
from colorama import init, Fore, Style

# Initialize colorama for Windows compatibility
init(autoreset=True)

class Colors:
    """Color constants for CLI output."""
    LABEL = Fore.CYAN
    VALUE = Fore.LIGHTCYAN_EX
    COUNT = Fore.LIGHTGREEN_EX
    MUTED = Style.DIM
    FRAME = Fore.LIGHTBLUE_EX
    TITLE = Fore.LIGHTWHITE_EX
    SECTION = Fore.LIGHTYELLOW_EX

    BOLD = Style.BRIGHT
    RESET = Style.RESET_ALL

# status kind -> (tag, color, bold)
STATUS_STYLES = {
    "success": ("[+]", Fore.LIGHTGREEN_EX, True),
    "error": ("[X]", Fore.LIGHTRED_EX, True),
    "info": ("[i]", Fore.LIGHTBLUE_EX, False),
    "working": ("[~]", Fore.LIGHTCYAN_EX, False),
}


def _console_safe(text):
    """Swap out characters a legacy Windows console encoding cannot show."""
    if not sys.platform.startswith('win'):
        return text
    encoding = getattr(sys.stdout, 'encoding', None) or 'cp1252'
    try:
        text.encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return text.encode('ascii', errors='replace').decode('ascii')
    return text

def colored(text, color, bold=False):
    """Wrap text in a color (and optional bold) escape sequence."""
    prefix = (Colors.BOLD if bold else "") + color
    return f"{prefix}{_console_safe(str(text))}{Colors.RESET}"

def status(kind, text):
    """Tagged status line, e.g. ``status("error", "bad size")``."""
    tag, color, bold = STATUS_STYLES[kind]
    return colored(f"{tag} {text}", color, bold=bold)

def error(text):
    return status("error", text)

def progress_bar(done, total, width=30):
    """Bar of knocked-down walls out of the walls a maze needs."""
    # A 1x1 maze needs no knockdowns and is complete from the start
    fraction = done / total if total else 1.0
    filled = min(width, int(fraction * width))
    bar = colored("#" * filled, Colors.COUNT) + colored("-" * (width - filled), Colors.MUTED)
    return f"[{bar}] {min(100, int(fraction * 100))}% ({done:,}/{total:,})"

def banner(title, width=60):
    """Title framed by rules."""
    rule = colored("=" * width, Colors.FRAME)
    return f"\n{rule}\n{colored(f'|{title.center(width - 2)}|', Colors.TITLE, bold=True)}\n{rule}"

def section(title):
    return colored(f"\n> {title}", Colors.SECTION, bold=True)

def setting(label, value):
    """``[*] label: value`` line for the run's settings."""
    return f"{colored(f'[*] {label}:', Colors.LABEL)} {colored(value, Colors.VALUE)}"

def stat(label, value):
    """``  - label: value`` line for the results summary."""
    shown = f"{value:,}" if isinstance(value, (int, float)) else value
    return f"{colored(f'  - {label}:', Fore.WHITE)} {colored(shown, Colors.COUNT, bold=True)}"
