#!/usr/bin/env python3
"""
CLI entry point for the JNI managed peer generator
Generates C++ peer classes that call into Java objects through JNI
"""

import argparse
import sys
import os
from pathlib import Path

# Add parent directory to sys.path for direct execution
if __name__ == '__main__' and __package__ is None:
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jni_peer_generator import __version__
from jni_peer_generator.config import GeneratorConfig, parse_config_file
from jni_peer_generator.errors import (
    EXIT_IO_ERROR,
    InternalBugError,
    PeerGeneratorError,
)
from jni_peer_generator.generator import PeerGenerator
from jni_peer_generator.loader import parse_model_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate C++ managed peer classes for tagged Java classes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --model classes.xml -d generated
  %(prog)s -m classes.xml -d generated --namespace My.Namespace --pch stdafx.h --force
        """
    )

    parser.add_argument(
        "-m", "--model",
        metavar="MODEL_FILE",
        required=True,
        help="XML file describing the classes to generate peers for"
    )

    parser.add_argument(
        "-d", "--output",
        metavar="DIRECTORY",
        help="Output directory for generated files (default: from the config file, else the current directory)"
    )

    parser.add_argument(
        "-C", "--config",
        metavar="CONFIG_FILE",
        help="XML settings file (<peers> root attributes and <include> elements)"
    )

    parser.add_argument(
        "--namespace",
        metavar="NS",
        help="Namespace to put every peer in, instead of each class's own (ex: My.Namespace)"
    )

    parser.add_argument(
        "--pch",
        metavar="FILE",
        help="Precompiled header to include first in generated .cpp files"
    )

    parser.add_argument(
        "--force",
        action="store_true",
        help="Always write output files, even when unchanged"
    )

    parser.add_argument(
        "--static-init",
        action="store_true",
        help="Cache class and method handles in function-local statics instead of std::call_once"
    )

    parser.add_argument(
        "--disambiguate-overloads",
        action="store_true",
        help="Append the parameter signature to overloaded method names"
    )

    parser.add_argument(
        "--internal-class-names",
        action="store_true",
        help="Look classes up by their slash-separated FindClass name instead of the descriptor"
    )

    parser.add_argument(
        "--constants",
        action="store_true",
        help="Emit #define pairs for static final constants in the headers"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def build_config(args) -> GeneratorConfig:
    """Settings file first, then command line overrides"""
    config = parse_config_file(args.config) if args.config else GeneratorConfig()

    overrides = {}
    if args.output:
        overrides["output_dir"] = args.output
    elif config.output_dir is None:
        overrides["output_dir"] = "."
    if args.namespace:
        overrides["namespace"] = args.namespace
    if args.pch:
        overrides["pch"] = args.pch
    if args.force:
        overrides["force"] = True
    if args.verbose:
        overrides["verbose"] = True
    if args.static_init:
        overrides["explicit_once_guard"] = False
    if args.disambiguate_overloads:
        overrides["disambiguate_overloads"] = True
    if args.internal_class_names:
        overrides["internal_class_names"] = True
    if args.constants:
        overrides["emit_constants"] = True
    return config.replace(**overrides)


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = build_config(args)
        classes = parse_model_file(args.model)

        if not any(cls.is_tagged for cls in classes):
            print("Error: No tagged classes found in model file", file=sys.stderr)
            sys.exit(1)

        Path(config.output_dir).mkdir(parents=True, exist_ok=True)

        generator = PeerGenerator(config)
        generator.generate(classes)
    except InternalBugError as e:
        print(f"Internal error: {e}", file=sys.stderr)
        sys.exit(e.exit_status)
    except PeerGeneratorError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_status)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_IO_ERROR)

    if config.verbose:
        print(f"Generated {len(generator.events)} file(s), {len(generator.written)} written")


if __name__ == "__main__":
    main()
