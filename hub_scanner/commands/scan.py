"""``scan`` and ``scan-org``: run the pattern library over stored requests."""
from hub_scanner.findings import format_findings
from hub_scanner.helpers import TablePrinter, print_counts, print_kv
from hub_scanner.print_utils import print_success, print_warning, safe_print
from hub_scanner.service import ScannerService
from hub_scanner.spinner import spinner
from hub_scanner.utils import mask_secret
def print_findings(findings):
    """Findings table; secrets are masked on screen and in the output file."""
    printer = TablePrinter([
        {"header": "Type", "width": 28, "color": "96"},
        {"header": "Secret", "width": 22, "color": "93"},
        {"header": "Location", "width": None, "color": "97"},
    ])
    printer.print_header()
    rows = []
    for item in sorted(format_findings(findings), key=lambda f: (f["secret_type"], f.get("file") or "")):
        if "file" in item:
            where = f"{item['file']}:{item['line']}"
        else:
            where = f"#{item['discussion_num']} {item['discussion']}"
        rows.append([item["secret_type"], mask_secret(item["secret"]), (where, item["url"]) if item["url"] else where])
    printer.print_rows(rows)
def _print_report(report):
    safe_print("")
    print_kv("Scan ID", report.result.scan_id)
    print_kv("Request ID", report.result.request_id)
    print_kv("Resources with findings", len(report.result.scanned_resources))
    if not report.findings:
        print_success("No secrets found.")
        safe_print("")
        return
    print_warning(f"{report.total} potential secret(s) found.")
    safe_print("")
    print_findings(report.findings)
    print_counts("By type", report.by_type)
    print_counts("By source", report.by_source)
    safe_print("")
def cmd_scan(args):
    service = ScannerService.from_environment()
    try:
        with spinner(f"Scanning {args.request_id}") as sp:
            report = service.scan_request(
                args.request_id, progress=lambda done, total: sp.update(f"Scanning {done}/{total}"))
    finally:
        service.close()
    _print_report(report)
def cmd_scan_org(args):
    service = ScannerService.from_environment()
    try:
        with spinner(f"Scanning stored {args.kind} of {args.org}"):
            report = service.scan_organization(args.org, args.kind)
    finally:
        service.close()
    safe_print("")
    print_kv("Requests scanned", report.scanned_requests)
    _print_report(report)
