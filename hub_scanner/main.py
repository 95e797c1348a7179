import sys
from hub_scanner.print_utils import Print
def main():
    try:
        from hub_scanner.cli import main_cli
        main_cli()
    except Exception as e:
        from hub_scanner.logging_utils import log
        log(f"op=main stage=fatal error={e!r}")
        Print.error(f"Fatal error: {e}")
        sys.exit(1)
if __name__ == "__main__":
    main()
