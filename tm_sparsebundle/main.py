import argparse
import sys
from pathlib import Path

from tm_sparsebundle.__version__ import __version__
from tm_sparsebundle.logging import LoggerFactory, setup_logging
from tm_sparsebundle.services.provisioning import run_provisioning
from tm_sparsebundle.storage.exceptions import ProvisionError
from tm_sparsebundle.ui.prompts import Console


EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tm-sparsebundle",
        description=(
            "Interactively create a sparsebundle disk image for Time Machine, "
            "optionally encrypted and inherited with tmutil."
        ),
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", help="Enable verbose debug output"
    )
    parser.add_argument(
        "--trace", action="store_true", help="Enable very verbose trace output"
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: ~/.local/state/tm-sparsebundle/logs)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv=None, console=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug, trace=args.trace, log_dir=args.log_dir)
    log = LoggerFactory.for_system()
    log.debug(f"tm-sparsebundle {__version__} starting")

    console = console or Console()
    try:
        result = run_provisioning(console)
    except ProvisionError as error:
        console.say(str(error))
        log.info(f"{type(error).__name__}: {error}")
        return error.exit_code
    except EOFError:
        console.say()
        console.say("Input closed. Exiting.")
        log.warning("Standard input closed before all answers were given")
        return 1
    except KeyboardInterrupt:
        console.say()
        console.say("Interrupted. Exiting.")
        log.warning("Interrupted by user")
        return EXIT_INTERRUPTED

    log.info(f"Provisioning finished: {result.outcome.value}")
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
