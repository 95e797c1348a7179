import shutil
import unicodedata
from datetime import datetime, timezone
from hub_scanner import print_utils
from hub_scanner.print_utils import Print, _write_output, safe_print
COLUMN_GAP = 2
def format_size(bytes_count):
    """Human-readable size for a byte count."""
    size = float(bytes_count)
    for unit in ("bytes", "KB", "MB"):
        if size < 1024:
            return f"{int(size)} bytes" if unit == "bytes" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"
def format_timestamp(value):
    """Render an ISO-8601 timestamp as ``18 Oct 2026 14:05 UTC``; unparsable input is returned as is."""
    if not value:
        return ""
    try:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return str(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%d %b %Y %H:%M UTC")
def _char_width(char):
    return 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
def get_visual_width(text):
    return sum(_char_width(c) for c in str(text))
def truncate_visual(text, max_width):
    """Cut ``text`` to ``max_width`` columns, ending in ``...`` when shortened."""
    if not text:
        return ""
    text = str(text)
    if get_visual_width(text) <= max_width:
        return text
    budget = max_width - 3 if max_width > 3 else max_width
    kept = []
    used = 0
    for char in text:
        w = _char_width(char)
        if used + w > budget:
            break
        kept.append(char)
        used += w
    return "".join(kept) + "..."
def pad_visual(text, width):
    padding = width - get_visual_width(text)
    return text + " " * padding if padding > 0 else text
class TablePrinter:
    """
    Column-aligned table output for findings and scan summaries.
    Args:
        columns: list of dicts with ``header``, ``width`` (None for flex) and ``color``.
        terminal_width: overrides the detected terminal width.
    Cells may be ``(text, url)`` tuples; the URL becomes a terminal hyperlink
    on screen and replaces the text in the mirrored output file.
    """
    def __init__(self, columns, terminal_width=None):
        self.columns = [dict(c) for c in columns]
        self.term_width = terminal_width or shutil.get_terminal_size((120, 20)).columns
        fixed = sum(c["width"] for c in self.columns if c.get("width"))
        flex = [c for c in self.columns if not c.get("width")]
        spare = self.term_width - fixed - COLUMN_GAP * (len(self.columns) - 1)
        for col in self.columns:
            col["_w"] = col["width"] if col.get("width") else max(10, spare // max(len(flex), 1))
    def _emit(self, screen_parts, file_parts):
        line = (" " * COLUMN_GAP).join(screen_parts)
        try:
            print(line)
        except UnicodeEncodeError:
            print(line.encode("utf-8", errors="replace").decode("utf-8"))
        _write_output((" " * COLUMN_GAP).join(file_parts).rstrip())
    def print_header(self):
        cells = [pad_visual(str(c.get("header", "")).upper(), c["_w"]) for c in self.columns]
        self._emit([Print.colorize(cell, "1;97") for cell in cells], cells)
        rule = ["-" * c["_w"] for c in self.columns]
        self._emit([Print.colorize(r, "90") for r in rule], rule)
    def print_row(self, values, style_prefix=""):
        screen, plain = [], []
        for idx, col in enumerate(self.columns):
            value = values[idx] if idx < len(values) else ""
            url = None
            if isinstance(value, tuple):
                value, url = value
            cell = pad_visual(truncate_visual(str(value), col["_w"]), col["_w"])
            colored = Print.colorize(cell, f"{style_prefix}{col.get('color', '97')}")
            if url and print_utils.COLOR_ENABLED:
                colored = f"\033]8;;{url}\033\\{colored}\033]8;;\033\\"
            screen.append(colored)
            plain.append(pad_visual(url or str(value), col["_w"]))
        self._emit(screen, plain)
    def print_rows(self, rows):
        for idx, row in enumerate(rows):
            self.print_row(row, style_prefix="2;" if idx % 2 else "")
def print_kv(label, value, width=22):
    safe_print(f"{Print.colorize(f'{label:<{width}}', '97')}: {value}")
def print_counts(title, counts, limit=None):
    """Print a ``name: count`` block sorted by descending count."""
    if not counts:
        return
    safe_print("")
    safe_print(Print.colorize(title, "1;97"))
    ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    for name, count in ordered[:limit] if limit else ordered:
        safe_print(f"  {Print.colorize(f'{count:>5}', '93')}  {name}")
