"""
Command-line interface for rastervec.

Provides commands for drawing scenes, extracting segments and writing a
default configuration.
"""

import argparse
import sys

from rastervec.config import save_default_config
from rastervec.tracer import configure_tracer, get_tracer


def _add_trace_arguments(parser):
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="rastervec",
        description="rastervec: draw primitives to bitmaps and extract line segments back out",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    draw_parser = subparsers.add_parser("draw", help="Render a scene file to a bitmap")
    draw_parser.add_argument(
        "--scene", "-s",
        required=True,
        help="Scene description (JSON or YAML)",
    )
    draw_parser.add_argument(
        "--out", "-o",
        required=True,
        help="Output image (.ppm for plain-text P3, otherwise written by OpenCV)",
    )
    _add_trace_arguments(draw_parser)

    extract_parser = subparsers.add_parser("extract", help="Extract segments from a bitmap")
    extract_parser.add_argument(
        "--input", "-i",
        required=True,
        help="Input image file",
    )
    extract_parser.add_argument(
        "--out", "-o",
        required=True,
        help="Output directory",
    )
    extract_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    extract_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug artifact generation",
    )
    _add_trace_arguments(extract_parser)

    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="rastervec_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "draw":
        return handle_draw(args)
    elif args.command == "extract":
        return handle_extract(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def _configure_from_args(args):
    configure_tracer(
        enabled=args.trace,
        level=args.trace_level,
        file_path=args.trace_file,
        json_output=args.trace_json,
    )
    return get_tracer()


def handle_draw(args):
    """Handle the draw command."""
    tracer = _configure_from_args(args)

    try:
        from rastervec.pipeline import run_draw

        with tracer.span("cli_draw", module="cli"):
            canvas = run_draw(args.scene, args.out)

        print(f"Drew {canvas.size_x}x{canvas.size_y} canvas to {args.out}")
        return 0

    except Exception as e:
        tracer.event(f"Draw failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_extract(args):
    """Handle the extract command."""
    tracer = _configure_from_args(args)

    try:
        from rastervec.pipeline import run_extract

        with tracer.span("cli_extract", module="cli"):
            report, validation = run_extract(
                input_path=args.input,
                out_dir=args.out,
                config_path=args.config,
                debug=args.debug,
            )

        print(f"\nExtraction completed successfully.")
        print(f"  Foreground pixels: {report.foreground_pixels}")
        print(f"  Segments: {report.segment_count}")
        print(f"  Orphan pixels: {len(report.orphan_pixels)}")
        print(f"  Validation errors: {validation.error_count}")
        print(f"  Validation warnings: {validation.warning_count}")
        print(f"\nOutputs saved to: {args.out}/")
        print(f"  - segments.json")
        print(f"  - segments.svg")
        print(f"  - extraction_report.json")
        print(f"  - validation_report.json")

        if validation.has_errors:
            print(f"\n[!] Validation errors detected. Review validation_report.json")
            return 1

        return 0

    except Exception as e:
        tracer.event(f"Extraction failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
