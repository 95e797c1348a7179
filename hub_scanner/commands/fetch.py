"""``fetch`` and ``fetch-org``: pull hub content into the local store."""
from hub_scanner.helpers import TablePrinter, print_kv
from hub_scanner.print_utils import print_info, print_success, print_warning, safe_print
from hub_scanner.service import ScannerService
from hub_scanner.spinner import spinner
def cmd_fetch(args):
    service = ScannerService.from_environment()
    try:
        with spinner(f"Fetching {args.kind} {args.resource_id}"):
            report = service.fetch_resource(args.kind, args.resource_id, args.prs, args.discussions)
    finally:
        service.close()
    request = report.request
    empty = sum(1 for f in request.files if not f.content)
    safe_print("")
    print_success(f"Fetched {request.resource_id}")
    print_kv("Request ID", request.request_id)
    print_kv("Files listed", report.candidates)
    print_kv("Files fetched", len(request.files))
    if empty:
        print_kv("Empty or failed", empty)
    print_kv("Discussions", len(request.discussions))
    safe_print("")
    print_info(f"Next: hubscan scan {request.request_id}")
    safe_print("")
def cmd_fetch_org(args):
    service = ScannerService.from_environment()
    try:
        with spinner(f"Fetching {args.kind} of {args.org}"):
            report = service.fetch_organization(args.org, args.kind, args.prs, args.discussions,
                                                fetch_contents=not args.no_contents)
    finally:
        service.close()
    safe_print("")
    print_success(f"{len(report.resource_ids)} {report.kind} recorded for {report.org}")
    if report.request_ids:
        print_kv("Fetched", len(report.request_ids))
    if report.failures:
        print_warning(f"{len(report.failures)} resource(s) could not be fetched:")
        printer = TablePrinter([
            {"header": "Resource", "width": 40, "color": "97"},
            {"header": "Error", "width": None, "color": "91"},
        ])
        printer.print_header()
        printer.print_rows(sorted(report.failures.items()))
    safe_print("")
    print_info(f"Next: hubscan scan-org {report.org} --kind {report.kind}")
    safe_print("")
