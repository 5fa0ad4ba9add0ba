import os
import sys


# ANSI color codes
class Colors:
    GREEN = '\033[92m'
    RED = '\033[91m'
    RESET = '\033[0m'


def supports_color(stream=None):
    """Check if the output stream is a terminal that understands ANSI codes."""
    stream = stream if stream is not None else sys.stdout
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    if os.environ.get("NO_COLOR"):
        return False

    if os.name == 'nt':
        return os.environ.get('ANSICON') is not None or \
            'WT_SESSION' in os.environ or \
            os.environ.get('TERM_PROGRAM') == 'vscode'

    return True


def colored(text, color, stream=None):
    """Apply color to text if supported."""
    if supports_color(stream):
        return f"{color}{text}{Colors.RESET}"
    return text
