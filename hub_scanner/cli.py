import sys
import argparse
import difflib
from datetime import datetime
from hub_scanner import __version__
from hub_scanner.errors import HubScannerError, exit_code_for
from hub_scanner.logging_utils import log
from hub_scanner.models import ResourceKind
from hub_scanner.print_utils import Print, colorize, set_verbose, set_output_file, close_output_file, print_cancelled
from hub_scanner.commands.login import cmd_login
from hub_scanner.commands.logout import cmd_logout
from hub_scanner.commands.tokens import cmd_token
from hub_scanner.commands.fetch import cmd_fetch, cmd_fetch_org
from hub_scanner.commands.scan import cmd_scan, cmd_scan_org
from hub_scanner.commands.results import cmd_results, cmd_dashboard
COMMAND_ALIASES = {
    'login': ['l', 'log', 'signin', 'auth'],
    'logout': ['lo', 'signout', 'log-out'],
    'token': ['tokens', 'tok', 'rotate'],
    'fetch': ['f', 'get', 'pull', 'fetc'],
    'fetch-org': ['org', 'fetchorg', 'forg', 'fetch-organization'],
    'scan': ['s', 'scn', 'scann'],
    'scan-org': ['scanorg', 'sorg', 'scan-organization'],
    'results': ['result', 'res', 'show'],
    'dashboard': ['dash', 'stats', 'summary'],
}
KIND_CHOICES = [k.singular for k in ResourceKind] + [k.value for k in ResourceKind]
def suggest_command(attempted):
    """Map a mistyped command to the closest known one, or None."""
    if not attempted:
        return None
    candidates = list(COMMAND_ALIASES) + [a for aliases in COMMAND_ALIASES.values() for a in aliases]
    matches = difflib.get_close_matches(attempted.lower(), candidates, n=1, cutoff=0.5)
    if not matches:
        return None
    for command, aliases in COMMAND_ALIASES.items():
        if matches[0] == command or matches[0] in aliases:
            return command
    return None
class SilentArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        print("")
        if 'invalid choice:' in message and 'argument command' in message:
            attempted = message.split('invalid choice:')[1].split('(')[0].strip().strip("'")
            Print.error(f"Invalid command: {attempted}")
            suggestion = suggest_command(attempted)
            if suggestion:
                Print.info(f"Did you mean: hubscan {suggestion}")
        else:
            Print.error(message)
        print("")
        sys.exit(2)
def print_help():
    print("")
    print(colorize(f"hubscan {__version__}: secret scanner for hub models, datasets and spaces", '1'))
    print("")
    rows = [
        ("login [--tokens T1,T2]", "Store hub API tokens in the OS keyring"),
        ("logout", "Remove stored tokens"),
        ("token [--rotate]", "Show (or advance) the active token"),
        ("fetch KIND ID [--prs] [--discussions]", "Fetch one model/dataset/space"),
        ("fetch-org ORG [--kind K] [--no-contents]", "Record and fetch an organization's resources"),
        ("scan REQUEST_ID", "Scan a fetched request"),
        ("scan-org ORG [--kind K]", "Scan every stored request of an organization"),
        ("results [SCAN_ID]", "Show a stored result, or list results"),
        ("dashboard", "Aggregate statistics over all scans"),
    ]
    pad = max(len(r[0]) for r in rows) + 4
    for usage, desc in rows:
        print(colorize(f"  hubscan {usage}".ljust(pad + 10), '96') + colorize(desc, '93'))
    print("")
    print(colorize("  --verbose (-V)   Echo log lines to the console", '90'))
    print(colorize("  --version (-v)   Show version", '90'))
    print(colorize("  -o [FILE]        Mirror output to FILE (auto-named when omitted)", '90'))
    print("")
def _add_output(p):
    p.add_argument("-o", "--output", nargs='?', const='', default=None)
def build_parser():
    parser = SilentArgumentParser(prog="hubscan", add_help=False)
    subparsers = parser.add_subparsers(dest="command")
    login_parser = subparsers.add_parser("login", add_help=False)
    login_parser.add_argument("--tokens", default=None)
    login_parser.set_defaults(func=cmd_login)
    subparsers.add_parser("logout", add_help=False).set_defaults(func=cmd_logout)
    token_parser = subparsers.add_parser("token", add_help=False)
    token_parser.add_argument("--rotate", action="store_true")
    token_parser.set_defaults(func=cmd_token)
    fetch_parser = subparsers.add_parser("fetch", add_help=False)
    fetch_parser.add_argument("kind", choices=KIND_CHOICES)
    fetch_parser.add_argument("resource_id")
    fetch_parser.add_argument("--prs", action="store_true")
    fetch_parser.add_argument("--discussions", action="store_true")
    _add_output(fetch_parser)
    fetch_parser.set_defaults(func=cmd_fetch)
    org_parser = subparsers.add_parser("fetch-org", add_help=False)
    org_parser.add_argument("org")
    org_parser.add_argument("--kind", choices=KIND_CHOICES, default="models")
    org_parser.add_argument("--prs", action="store_true")
    org_parser.add_argument("--discussions", action="store_true")
    org_parser.add_argument("--no-contents", action="store_true")
    _add_output(org_parser)
    org_parser.set_defaults(func=cmd_fetch_org)
    scan_parser = subparsers.add_parser("scan", add_help=False)
    scan_parser.add_argument("request_id")
    _add_output(scan_parser)
    scan_parser.set_defaults(func=cmd_scan)
    scan_org_parser = subparsers.add_parser("scan-org", add_help=False)
    scan_org_parser.add_argument("org")
    scan_org_parser.add_argument("--kind", choices=KIND_CHOICES, default="models")
    _add_output(scan_org_parser)
    scan_org_parser.set_defaults(func=cmd_scan_org)
    results_parser = subparsers.add_parser("results", add_help=False)
    results_parser.add_argument("scan_id", nargs="?")
    results_parser.add_argument("--page", type=int, default=1)
    results_parser.add_argument("--limit", type=int, default=10)
    _add_output(results_parser)
    results_parser.set_defaults(func=cmd_results)
    dashboard_parser = subparsers.add_parser("dashboard", add_help=False)
    _add_output(dashboard_parser)
    dashboard_parser.set_defaults(func=cmd_dashboard)
    return parser
def _default_output_name(args):
    parts = [args.command]
    for attr in ("resource_id", "org", "request_id", "scan_id"):
        value = getattr(args, attr, None)
        if value:
            parts.append(str(value).replace('/', '_'))
            break
    parts.append(datetime.now().strftime('%Y%m%d_%H%M%S'))
    return f"{'_'.join(parts)}.txt"
def main_cli(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)
    if "--version" in argv or "-v" in argv:
        print(f"hubscan v{__version__}")
        sys.exit(0)
    if not argv or argv[0] in ("-h", "--help", "help"):
        print_help()
        sys.exit(0)
    if "--verbose" in argv or "-V" in argv:
        set_verbose(True)
        argv = [a for a in argv if a not in ("--verbose", "-V")]
    args = build_parser().parse_args(argv)
    if not getattr(args, "func", None):
        print_help()
        sys.exit(0)
    output_file = getattr(args, "output", None)
    if output_file is not None:
        set_output_file(output_file or _default_output_name(args))
    try:
        args.func(args)
    except KeyboardInterrupt:
        print("")
        print_cancelled("Operation cancelled.")
        close_output_file()
        sys.exit(130)
    except HubScannerError as e:
        log(f"op={args.command} stage=failed category={e.category} error={e}")
        Print.error(str(e))
        close_output_file()
        sys.exit(exit_code_for(e))
    close_output_file()
