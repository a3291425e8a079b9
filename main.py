"""Entry point for the LC-3 emulator.

    python main.py [--os lc3os.obj] program.obj     run in the terminal
    python main.py --gui [program.obj]              open the inspector window
"""
import argparse
import logging
import sys
from pathlib import Path

from lc3.cpu_core import CPU
from lc3.errors import LoadError, UnimplementedOpcode
from lc3.terminal import raw_input_mode

EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_INPUT_INVALID = 2
EXIT_OPCODE_INVALID = 3
EXIT_INTERRUPTED = -2

log = logging.getLogger("lc3")


class UsageParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = UsageParser(prog="lc3", description="Run an LC-3 program image.")
    parser.add_argument("program", nargs="?", help="Program image (.obj)")
    parser.add_argument("--os", action="append", default=[], metavar="IMAGE",
                        help="Boot/OS image loaded before the program (repeatable)")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="Stop after this many instructions")
    parser.add_argument("--gui", action="store_true",
                        help="Open the inspector window instead of running in the terminal")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase verbosity (-v, -vv)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Suppress all log output except errors")
    parser.add_argument("--trace", action="store_true",
                        help="Log every executed instruction")
    parser.add_argument("--log-file", type=str, help="Also write the log to a file")
    return parser


def setup_logging(args):
    """Log to stderr; stdout belongs to the emulated display."""
    if args.quiet:
        level = logging.ERROR
    elif args.trace or args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handlers = [console]

    if args.log_file:
        log_path = Path(args.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        handlers.append(file_handler)
        level = logging.DEBUG

    logging.basicConfig(level=level, handlers=handlers, force=True)


def load_images(cpu: CPU, args):
    for image in args.os:
        cpu.load_file(image)
    if args.program:
        cpu.load_file(args.program)


def run_console(cpu: CPU, args, prog: str) -> int:
    try:
        with raw_input_mode():
            cpu.run(max_steps=args.max_steps)
    except KeyboardInterrupt:
        print()
        return EXIT_INTERRUPTED
    except UnimplementedOpcode as e:
        log.debug("%s", e)
        print(f"{prog}: Failed to execute input: "
              "Attempted to execute unimplemented opcode", file=sys.stderr)
        return EXIT_OPCODE_INVALID
    return EXIT_SUCCESS


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.program and not args.gui:
        parser.error("a program image is required")
    setup_logging(args)

    if args.gui:
        from gui.main_window import run as run_gui
        return run_gui(args.os + ([args.program] if args.program else []))

    cpu = CPU()
    try:
        load_images(cpu, args)
    except LoadError as e:
        print(f"{parser.prog}: Failed to load input: {e.source}: {e}", file=sys.stderr)
        return EXIT_INPUT_INVALID

    return run_console(cpu, args, parser.prog)


if __name__ == "__main__":
    sys.exit(main())
