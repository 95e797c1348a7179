import sys
import os
import re
VERBOSE = False
_OUTPUT_FILE = None
_OUTPUT_STATS = {'lines': 0, 'bytes': 0}
_WRITE_ERROR_SHOWN = False
_ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
def supports_color():
    if os.environ.get("NO_COLOR"):
        return False
    is_a_tty = hasattr(sys.stdout, 'isatty') and sys.stdout.isatty()
    if sys.platform == 'win32':
        return is_a_tty
    return is_a_tty and 'TERM' in os.environ
COLOR_ENABLED = supports_color()
def colorize(text, color_code):
    if COLOR_ENABLED:
        return f"\033[{color_code}m{text}\033[0m"
    return text
def _strip_ansi(text):
    return _ANSI_ESCAPE.sub('', text)
def set_output_file(filepath):
    """Mirror CLI output (without colors) into ``filepath``."""
    global _OUTPUT_FILE, _OUTPUT_STATS, _WRITE_ERROR_SHOWN
    if not filepath:
        _OUTPUT_FILE = None
        return
    try:
        _OUTPUT_FILE = open(filepath, 'w', encoding='utf-8')
        _OUTPUT_STATS = {'lines': 0, 'bytes': 0}
        _WRITE_ERROR_SHOWN = False
    except OSError as e:
        from hub_scanner.logging_utils import log
        Print.warn(f"Could not open output file {filepath}: {e}")
        log(f"op=set_output_file stage=open_error path={filepath} error={e}")
        _OUTPUT_FILE = None
def close_output_file():
    global _OUTPUT_FILE
    if not _OUTPUT_FILE:
        return
    from hub_scanner.helpers import format_size
    filepath = _OUTPUT_FILE.name
    try:
        _OUTPUT_FILE.close()
    except OSError as e:
        from hub_scanner.logging_utils import log
        log(f"op=close_output_file stage=close_error path={filepath} error={e}")
    _OUTPUT_FILE = None
    Print.success(f"Output saved to {filepath} ({_OUTPUT_STATS['lines']} lines, {format_size(_OUTPUT_STATS['bytes'])})")
def _write_output(text):
    global _WRITE_ERROR_SHOWN
    if not _OUTPUT_FILE:
        return
    try:
        clean_text = _strip_ansi(str(text))
        _OUTPUT_FILE.write(clean_text + '\n')
        _OUTPUT_FILE.flush()
        _OUTPUT_STATS['lines'] += 1
        _OUTPUT_STATS['bytes'] += len(clean_text) + 1
    except OSError as e:
        if not _WRITE_ERROR_SHOWN:
            _WRITE_ERROR_SHOWN = True
            print(colorize(f"[WARN] Output write failed: {e}", '93'))
def safe_print(text='', **kwargs):
    """Print text with Unicode encoding error handling."""
    try:
        print(text, **kwargs)
    except UnicodeEncodeError:
        print(str(text).encode('ascii', errors='replace').decode('ascii'), **kwargs)
    _write_output(text)
class Print:
    @staticmethod
    def _emit(prefix, msg, color, **kwargs):
        plain = f"[{prefix}] {msg}"
        colored_msg = colorize(plain, color)
        try:
            print(colored_msg, **kwargs)
        except UnicodeEncodeError:
            print(colored_msg.encode('utf-8', errors='replace').decode('utf-8'), **kwargs)
        _write_output(plain)
    @staticmethod
    def success(msg, **kwargs):
        Print._emit("OK", msg, '92', **kwargs)
    @staticmethod
    def error(msg, **kwargs):
        Print._emit("ERROR", msg, '91', **kwargs)
    @staticmethod
    def warn(msg, **kwargs):
        Print._emit("WARN", msg, '93', **kwargs)
    @staticmethod
    def info(msg, **kwargs):
        Print._emit("INFO", msg, '96', **kwargs)
    @staticmethod
    def cancelled(msg, **kwargs):
        Print._emit("CANCELLED", msg, '90', **kwargs)
    @staticmethod
    def colorize(text, color_code):
        return colorize(text, color_code)
def print_success(msg): Print.success(msg)
def print_warning(msg): Print.warn(msg)
def print_info(msg): Print.info(msg)
def print_cancelled(msg): Print.cancelled(msg)
def set_verbose(v: bool):
    global VERBOSE
    VERBOSE = bool(v)
