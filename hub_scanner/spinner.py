"""Progress spinner shown while fetches and scans run in the background."""
import shutil
import sys
import threading
from hub_scanner import print_utils
class Spinner:
    FRAMES = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
    INTERVAL = 0.1
    def __init__(self, message="Working", color='96', stream=None):
        self.message = message
        self.color = color
        self.stream = stream or sys.stdout
        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._thread = None
    @property
    def enabled(self):
        # Verbose mode prints log lines, which would interleave with the frames.
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty()) and not print_utils.VERBOSE
    def _render(self, frame):
        cols = shutil.get_terminal_size((80, 20)).columns
        with self._lock:
            msg = self.message
        limit = max(5, cols - 5)
        if len(msg) + 2 > limit:
            msg = msg[:max(0, limit - 5)] + "..."
        if print_utils.COLOR_ENABLED:
            return f"\r\033[K\033[{self.color}m{frame}\033[0m {msg}"
        return f"\r{frame} {msg}".ljust(cols - 1)
    def _clear(self):
        if print_utils.COLOR_ENABLED:
            self.stream.write("\r\033[K")
        else:
            cols = shutil.get_terminal_size((80, 20)).columns
            self.stream.write("\r" + " " * (cols - 1) + "\r")
        self.stream.flush()
    def _spin(self):
        index = 0
        while not self._stop_event.is_set():
            self.stream.write(self._render(self.FRAMES[index % len(self.FRAMES)]))
            self.stream.flush()
            index += 1
            self._stop_event.wait(self.INTERVAL)
        self._clear()
    def start(self):
        if self._thread is not None or not self.enabled:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._spin, daemon=True)
        self._thread.start()
    def stop(self):
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join(timeout=1)
        self._thread = None
    def update(self, message):
        """Replace the message; safe to call from worker threads."""
        with self._lock:
            self.message = message
    def __enter__(self):
        self.start()
        return self
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
def spinner(message="Working", color='96'):
    """
    Usage:
        with spinner("Fetching files") as sp:
            sp.update("Fetched 3/10")
    """
    return Spinner(message, color)
