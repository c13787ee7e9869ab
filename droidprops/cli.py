"""
Command Line Interface for droidprops
"""

import argparse
import sys
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from . import __version__
from .computer import PropertyComputer
from .exceptions import DroidPropsError
from .model_loader import ModelLoader
from .reporters import REPORTERS, get_reporter


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging"""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog='droidprops',
        description='droidprops - Derive code analysis scanner properties from an Android build model',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s build-model.yaml                         # Print sonar-project.properties
  %(prog)s build-model.yaml --variant fullRelease   # Analyse a specific variant
  %(prog)s build-model.yaml --variant :app=debug    # Variant for one subproject
  %(prog)s build-model.yaml -f args -o scanner.args # -D arguments for the scanner
  %(prog)s build-model.yaml -D sonar.host.url=http://localhost:9000
        """
    )

    parser.add_argument(
        'model',
        help='Path to the YAML build model'
    )

    selection_group = parser.add_argument_group('Variant Options')
    selection_group.add_argument(
        '--variant',
        action='append',
        dest='variants',
        metavar='[PATH=]NAME',
        help='Variant to analyse, for the root project or for the project at PATH (can be repeated)'
    )
    selection_group.add_argument(
        '-D', '--property',
        action='append',
        dest='properties',
        metavar='KEY=VALUE',
        help='Extra property applied after all computed ones (can be repeated)'
    )

    output_group = parser.add_argument_group('Output Options')
    output_group.add_argument(
        '-o', '--output',
        help='Output file path (default: stdout)'
    )
    output_group.add_argument(
        '-f', '--format',
        choices=sorted(REPORTERS),
        default='properties',
        help='Output format (default: properties)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Debug mode (very verbose)'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(args)


def _split_pair(text: str, option: str) -> Tuple[str, str]:
    key, sep, value = text.partition('=')
    if not sep or not key:
        raise ValueError(f"Invalid {option} value '{text}', expected KEY=VALUE")
    return key, value


def parse_variant_overrides(values: Optional[List[str]]) -> Dict[str, str]:
    """Map '--variant' values to project paths, a bare name targets the root project"""
    overrides = {}
    for value in values or []:
        if '=' in value:
            path, name = _split_pair(value, '--variant')
            overrides[path] = name
        else:
            overrides[':'] = value
    return overrides


def parse_property_overrides(values: Optional[List[str]]) -> Dict[str, str]:
    return dict(_split_pair(value, '-D') for value in values or [])


def run(args: argparse.Namespace) -> int:
    """Compute and render properties for the model"""
    project = ModelLoader().load_file(args.model)

    computer = PropertyComputer(
        project,
        variant_overrides=parse_variant_overrides(args.variants),
        overrides=parse_property_overrides(args.properties),
    )
    properties = computer.compute()

    reporter = get_reporter(args.format)
    reporter.report(properties, args.output)
    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parsed_args = parse_args(args)

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    model = Path(parsed_args.model)
    if not model.exists():
        print(f"Error: Model file does not exist: {model}", file=sys.stderr)
        return 1

    try:
        return run(parsed_args)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except (DroidPropsError, ValueError) as e:
        if parsed_args.debug:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
