from hub_scanner.helpers import TablePrinter, format_timestamp, print_counts, print_kv
from hub_scanner.models import ScanResult
from hub_scanner.print_utils import print_info, print_success, safe_print
from hub_scanner.service import ScannerService
from hub_scanner.commands.scan import print_findings
def _print_summaries(summaries):
    printer = TablePrinter([
        {"header": "Scan ID", "width": 32, "color": "96"},
        {"header": "Findings", "width": 9, "color": "93"},
        {"header": "Resources", "width": 9, "color": "97"},
        {"header": "Created", "width": 22, "color": "90"},
        {"header": "Request", "width": None, "color": "97"},
    ])
    printer.print_header()
    printer.print_rows([
        [s["scan_id"], s["findings"], s["resources"], format_timestamp(s["created_at"]), s["request_id"]]
        for s in summaries
    ])
def cmd_results(args):
    """Show one stored scan result, or a page of result summaries when no id is given."""
    service = ScannerService.from_environment()
    try:
        if args.scan_id:
            data = service.get_result(args.scan_id)
        else:
            data = service.list_results(page=args.page, limit=args.limit)
    finally:
        service.close()
    safe_print("")
    if not args.scan_id:
        if not data["results"]:
            print_info("No scan results stored yet.")
        else:
            _print_summaries(data["results"])
            safe_print("")
            print_info(f"Page {data['page']}/{max(data['total_pages'], 1)} ({data['total']} results)")
        safe_print("")
        return
    result = ScanResult.from_dict(data)
    print_kv("Scan ID", data["scan_id"])
    print_kv("Request ID", data["request_id"])
    print_kv("Created", format_timestamp(data["created_at"]))
    print_kv("Total findings", data["total_findings"])
    findings = [f for r in result.scanned_resources for f in r.findings]
    if findings:
        safe_print("")
        print_findings(findings)
        print_counts("By type", data["findings_by_type"])
        print_counts("By resource", data["findings_by_resource"], limit=20)
    else:
        print_success("No secrets were found in this scan.")
    safe_print("")
def cmd_dashboard(args):
    service = ScannerService.from_environment()
    try:
        data = service.dashboard()
    finally:
        service.close()
    safe_print("")
    print_kv("Scans", data["total_scans"])
    print_kv("Findings", data["total_findings"])
    print_kv("Resources with issues", data["resources_with_issues"])
    print_kv("High-risk findings", data["high_risk_count"])
    print_counts("By secret type", data["by_secret_type"], limit=15)
    print_counts("By source type", data["by_source_type"])
    print_counts("By resource type", data["by_resource_type"])
    if data["recent_scans"]:
        safe_print("")
        _print_summaries(data["recent_scans"])
    safe_print("")
