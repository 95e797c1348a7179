import getpass
from hub_scanner.config import load_tokens, save_tokens, secure_store_available
from hub_scanner.print_utils import print_cancelled, print_info, print_success, print_warning, safe_print
from hub_scanner.utils import mask_secret, split_csv
def cmd_login(args):
    """
    Store one or more hub API tokens in the OS keyring.
    Tokens come from ``--tokens`` or an interactive prompt (comma separated).
    """
    if not secure_store_available():
        safe_print("")
        print_warning("No OS keyring backend is available.")
        print_info("Export HUBSCAN_TOKENS=token1,token2 instead.")
        safe_print("")
        return
    raw = getattr(args, "tokens", None)
    if not raw:
        if load_tokens():
            print_warning("Tokens are already configured; they will be replaced.")
        try:
            raw = getpass.getpass("Hub API token(s), comma separated: ")
        except (KeyboardInterrupt, EOFError):
            safe_print("")
            print_cancelled("Login cancelled.")
            return
    tokens = save_tokens(split_csv(raw))
    safe_print("")
    print_success(f"Stored {len(tokens)} token(s).")
    for token in tokens:
        print_info(f"  {mask_secret(token)}")
    safe_print("")
