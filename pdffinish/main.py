# main.py
import argparse
import logging
import sys
from pathlib import Path

from . import config
from .errors import NO_ERROR, PDFFinishError, UsageError
from .finish import PDFFinish

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Report parse failures as UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(f"Error processing command: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="pdffinish",
        description="Update PDF metadata and generate a table of contents from heading fonts.",
        add_help=False,
    )
    parser.add_argument("-s", "--show", action="store_true", help="Show PDF metadata and ToC")
    parser.add_argument("-v", "--version", action="store_true", help="Show version number")
    parser.add_argument("-h", "--help", action="store_true", help="Print this message")
    parser.add_argument("-i", dest="input", metavar="inputFile", help="input PDF file")
    parser.add_argument("-o", dest="output", metavar="outputFile", help="output PDF file")
    parser.add_argument("-c", dest="config", metavar="configFile", help="configuration file (JSON)")
    parser.add_argument("--usage", action="store_true",
                        help="with --show, also print a font usage table")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser


def validate_args(args) -> None:
    """Check option combinations and that the named files exist."""
    if args.show:
        if not args.input:
            raise UsageError("Missing input file for show option")
        if args.output or args.config:
            raise UsageError("Cannot specify config or output file with show option")
    else:
        if not (args.input and args.output and args.config):
            raise UsageError("Must specify input, output and configuration files")
        if args.usage:
            raise UsageError("The usage option is only valid with the show option")

    # a missing config file is reported by load_config as a read error
    if not Path(args.input).exists():
        raise UsageError("PDF input file does not exist")


def invoke(argv=None) -> int:
    """Run the tool and return its exit code without exiting the process."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)

        if args.version:
            print(f"Version {config.VERSION}")
            return NO_ERROR
        if args.help:
            parser.print_help()
            return NO_ERROR
        if args.verbose:
            logging.getLogger("pdffinish").setLevel(logging.DEBUG)

        validate_args(args)

        finish = PDFFinish()
        if args.show:
            finish.show_info(args.input, usage=args.usage)
        else:
            # config problems must surface before the PDF is opened
            finish_config = config.load_config(args.config)
            finish.generate_pdf(finish_config, args.input, args.output)

    except UsageError as e:
        logger.error(str(e))
        print()
        parser.print_help()
        return e.exit_code
    except PDFFinishError as e:
        logger.error(str(e))
        return e.exit_code

    return NO_ERROR


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    sys.exit(invoke(sys.argv[1:]))


if __name__ == "__main__":
    main()
