import sys
from countup.cli import parse_args
from countup.common.logger import log, enable_console
from countup.core.countup_state import CountState
from countup.core.dates import InvalidInput, resolve_start

# Entry point for `python -m countup`
def run(argv=None) -> None:
    args = parse_args(argv)
    if args.verbose:
        enable_console()

    # Bad dates are refused before any window exists
    try:
        resolved = resolve_start(args.date)
    except InvalidInput as e:
        log.error(str(e))
        sys.stderr.write(f"countup: {e}\n")
        sys.exit(2)

    try:
        # Qt only gets imported once the date is known to be good
        from countup.ui.app import main
        sys.exit(main(CountState.from_resolved(resolved)))
    except SystemExit:
        raise
    except Exception:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)

if __name__ == "__main__":
    run()
