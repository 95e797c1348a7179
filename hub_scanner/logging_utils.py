import os
import threading
from datetime import datetime
from hub_scanner import constants
from hub_scanner import print_utils
from hub_scanner.utils import mask_sensitive
MAX_LOG_BYTES = 1024 * 1024
_log_lock = threading.Lock()
def log(msg):
    """Append a masked, timestamped line to the log file.

    Worker threads log concurrently, so writes are serialized. Logging never
    raises into the caller.
    """
    masked = mask_sensitive(str(msg))
    if print_utils.VERBOSE:
        print_utils.Print.info(masked)
    log_file = constants.LOG_FILE
    try:
        with _log_lock:
            log_dir = os.path.dirname(log_file)
            if not os.path.isdir(log_dir):
                os.makedirs(log_dir, mode=0o700, exist_ok=True)
            if os.path.isfile(log_file) and os.path.getsize(log_file) > MAX_LOG_BYTES:
                os.remove(log_file)
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(f"[{datetime.now().isoformat()}] {masked}\n")
            try:
                os.chmod(log_file, 0o600)
            except OSError:
                pass
    except OSError as e:
        if print_utils.VERBOSE:
            print_utils.Print.warn(f"Log file error: {e}")
