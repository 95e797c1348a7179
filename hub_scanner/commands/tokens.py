from hub_scanner.helpers import print_kv
from hub_scanner.print_utils import print_info, print_warning, safe_print
from hub_scanner.service import ScannerService
def cmd_token(args):
    """Show the token rotation state, optionally advancing to the next token."""
    service = ScannerService.from_environment()
    try:
        status = service.rotate_token() if args.rotate else service.token_status()
    finally:
        service.close()
    safe_print("")
    if not status["count"]:
        print_warning("No tokens configured; requests will be unauthenticated.")
        safe_print("")
        return
    print_kv("Tokens", status["count"])
    print_kv("Current index", status["index"])
    print_kv("Current token", status["current"])
    if args.rotate:
        print_info("Rotation only lasts for this process.")
    safe_print("")
