from hub_scanner.config import delete_tokens, load_tokens
from hub_scanner.print_utils import print_info, print_success, print_warning, safe_print
def cmd_logout(args):
    safe_print("")
    if not load_tokens():
        print_warning("No tokens are stored.")
        safe_print("")
        return
    if delete_tokens():
        print_success("Stored tokens removed.")
    else:
        print_warning("No keyring entry was removed.")
    print_info("Tokens set through HUBSCAN_TOKENS are not affected.")
    safe_print("")
