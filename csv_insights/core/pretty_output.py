"""
Pretty output formatting for CLI.

Provides consistent terminal output for the csv-insights command line:
headers, sections, key/value metrics, compact tables and insight findings.
"""

from colorama import Fore, Style, just_fix_windows_console
import os


class PrettyOutput:
    """
    Pretty output formatter for the csv-insights CLI.

    Provides consistent terminal output with colors, boxes and visual
    hierarchy. The core library never prints; only the CLI uses this class.
    """

    # Color scheme
    PRIMARY = Fore.CYAN
    SUCCESS = Fore.GREEN
    WARNING = Fore.YELLOW
    ERROR = Fore.RED
    INFO = Fore.BLUE
    HEADER = Fore.WHITE + Style.BRIGHT
    DIM = Style.DIM
    RESET = Style.RESET_ALL

    # Symbols
    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    WARN = "⚠"
    INFO_SYMBOL = "ℹ"
    MAGNIFY = "🔍"
    BRAIN = "🧠"
    CHART = "📊"

    _PALETTE = {
        "PRIMARY": PRIMARY,
        "SUCCESS": SUCCESS,
        "WARNING": WARNING,
        "ERROR": ERROR,
        "INFO": INFO,
        "HEADER": HEADER,
        "DIM": DIM,
        "RESET": RESET,
    }

    @classmethod
    def configure(cls, color=True):
        """
        Enable ANSI handling and select colored or plain output.

        Args:
            color: False replaces every color code with an empty string
        """
        just_fix_windows_console()
        for name, code in cls._PALETTE.items():
            setattr(cls, name, code if color else "")

    @staticmethod
    def get_terminal_width():
        """Get terminal width, default to 80 if cannot determine."""
        try:
            return os.get_terminal_size().columns
        except OSError:
            return 80

    @staticmethod
    def header(text, width=None):
        """
        Print a major header with box drawing.

        Args:
            text: Header text
            width: Box width (default: terminal width)
        """
        if width is None:
            width = min(PrettyOutput.get_terminal_width(), 80)

        padding = (width - len(text) - 2) // 2
        line = "═" * width

        print(f"\n{PrettyOutput.PRIMARY}╔{line}╗")
        print(f"║{' ' * padding}{text}{' ' * (width - len(text) - padding)}║")
        print(f"╚{line}╝{PrettyOutput.RESET}\n")

    @staticmethod
    def section(text, width=None):
        """
        Print a section header.

        Args:
            text: Section text
            width: Line width (default: terminal width)
        """
        if width is None:
            width = min(PrettyOutput.get_terminal_width(), 80)

        line = "─" * width
        print(f"\n{PrettyOutput.HEADER}{line}")
        print(f"{PrettyOutput.ARROW} {text}")
        print(f"{line}{PrettyOutput.RESET}\n")

    @staticmethod
    def subsection(text):
        """Print a subsection header."""
        print(f"\n{PrettyOutput.HEADER}{text}:{PrettyOutput.RESET}")

    @staticmethod
    def success(message, indent=0):
        """Print a success message with checkmark."""
        spaces = " " * indent
        print(f"{spaces}{PrettyOutput.SUCCESS}{PrettyOutput.CHECK}{PrettyOutput.RESET} {message}")

    @staticmethod
    def error(message, indent=0):
        """Print an error message with cross."""
        spaces = " " * indent
        print(f"{spaces}{PrettyOutput.ERROR}{PrettyOutput.CROSS}{PrettyOutput.RESET} {message}")

    @staticmethod
    def info(message, indent=0):
        """Print an info message."""
        spaces = " " * indent
        print(f"{spaces}{PrettyOutput.INFO}{PrettyOutput.INFO_SYMBOL}{PrettyOutput.RESET} {message}")

    @staticmethod
    def blank_line():
        """Print a blank line."""
        print()

    @staticmethod
    def task_start(message, icon=None):
        """
        Print a task starting message.

        Args:
            message: Task description
            icon: Optional emoji icon (default: magnifying glass)
        """
        icon = icon or PrettyOutput.MAGNIFY
        print(f"\n{icon} {PrettyOutput.HEADER}{message}{PrettyOutput.RESET}")

    @staticmethod
    def metric(label, value, color=None, indent=2):
        """
        Print a metric with label and value.

        Args:
            label: Metric label
            value: Metric value
            color: Optional color for value
            indent: Indentation spaces
        """
        spaces = " " * indent
        color = color or PrettyOutput.PRIMARY
        print(f"{spaces}{PrettyOutput.DIM}{label}:{PrettyOutput.RESET} {color}{value}{PrettyOutput.RESET}")

    @staticmethod
    def output_file(label, path, indent=2):
        """
        Print an output file path.

        Args:
            label: File type label (e.g., "JSON")
            path: File path
            indent: Indentation spaces
        """
        spaces = " " * indent
        print(f"{spaces}{PrettyOutput.ARROW} {PrettyOutput.DIM}{label}:{PrettyOutput.RESET} {path}")

    @staticmethod
    def insight(title, body, severity="info", indent=2):
        """
        Print an insight with a severity marker.

        Args:
            title: Insight title
            body: Insight text
            severity: One of "info", "warning", "success", "error"
            indent: Indentation spaces
        """
        spaces = " " * indent
        markers = {
            "info": f"{PrettyOutput.INFO}{PrettyOutput.INFO_SYMBOL}{PrettyOutput.RESET}",
            "warning": f"{PrettyOutput.WARNING}{PrettyOutput.WARN}{PrettyOutput.RESET}",
            "success": f"{PrettyOutput.SUCCESS}{PrettyOutput.CHECK}{PrettyOutput.RESET}",
            "error": f"{PrettyOutput.ERROR}{PrettyOutput.CROSS}{PrettyOutput.RESET}",
        }
        marker = markers.get(severity, markers["info"])
        print(f"{spaces}{marker} {PrettyOutput.HEADER}{title}{PrettyOutput.RESET}")
        print(f"{spaces}  {body}")

    @staticmethod
    def quality_indicator(score, width=20):
        """
        Return a visual quality indicator bar.

        Args:
            score: Quality score 0-100
            width: Bar width in characters

        Returns:
            Formatted quality bar string
        """
        filled = int(width * score / 100)
        empty = width - filled

        if score >= 90:
            color = PrettyOutput.SUCCESS
        elif score >= 70:
            color = PrettyOutput.WARNING
        else:
            color = PrettyOutput.ERROR

        bar = f"{color}{'█' * filled}{PrettyOutput.DIM}{'░' * empty}{PrettyOutput.RESET}"
        return f"{bar} {score:.0f}%"

    @staticmethod
    def profile_summary(rows, cols, quality, duration):
        """
        Print a compact profile summary line.

        Args:
            rows: Number of rows
            cols: Number of columns
            quality: Share of complete columns, 0-100
            duration: Processing time in seconds
        """
        quality_bar = PrettyOutput.quality_indicator(quality, width=15)

        parts = [
            f"{PrettyOutput.PRIMARY}{rows:,}{PrettyOutput.RESET} rows",
            f"{PrettyOutput.PRIMARY}{cols}{PrettyOutput.RESET} cols",
            f"Complete columns: {quality_bar}",
            f"{PrettyOutput.DIM}{duration:.1f}s{PrettyOutput.RESET}"
        ]

        print(f"\n{PrettyOutput.CHECK} {' │ '.join(parts)}")

    @staticmethod
    def compact_table(headers, rows, col_widths=None):
        """
        Print a compact table.

        Args:
            headers: List of header strings
            rows: List of row tuples
            col_widths: Optional list of column widths
        """
        if not col_widths:
            col_widths = [max(len(str(h)), max(len(str(r[i])) for r in rows) if rows else 0)
                          for i, h in enumerate(headers)]

        # Header
        header_str = "  ".join(f"{h:<{col_widths[i]}}" for i, h in enumerate(headers))
        print(f"  {PrettyOutput.HEADER}{header_str}{PrettyOutput.RESET}")
        print(f"  {PrettyOutput.DIM}{'─' * len(header_str)}{PrettyOutput.RESET}")

        # Rows
        for row in rows:
            row_str = "  ".join(f"{str(v):<{col_widths[i]}}" for i, v in enumerate(row))
            print(f"  {row_str}")
