import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.config import DiagramConfig, config_to_dict, load_config
from .core.descriptors import JavaSourceScopeResolver
from .core.diagrams import ClassDiagramGenerator
from .core.diagrams.renderer import render_puml_to_svg
from .core.errors import UmlGenError


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="umlgen",
        description="Generate a PlantUML class diagram from Java sources",
    )
    parser.add_argument("--config", type=str, help="YAML configuration file")
    parser.add_argument(
        "--source", action="append", default=[], metavar="PATH",
        help="Source directory or source archive (repeatable)",
    )
    parser.add_argument(
        "--package", action="append", default=[], metavar="NAME",
        help="Package to include, with its sub-packages (repeatable)",
    )
    parser.add_argument("--include", type=str, help="Regular expression selecting qualified type names")
    parser.add_argument("--exclude", type=str, help="Regular expression removing qualified type names")
    parser.add_argument(
        "--hide-class", action="append", default=[], metavar="NAME",
        help="Qualified name of a class to hide (repeatable)",
    )
    parser.add_argument("--hide-fields", action="store_true", help="Emit 'hide fields'")
    parser.add_argument("--hide-methods", action="store_true", help="Emit 'hide methods'")
    parser.add_argument("--remove-fields", action="store_true", help="Leave all fields out of the model")
    parser.add_argument("--remove-methods", action="store_true", help="Leave all methods out of the model")
    parser.add_argument("--simplify", action="store_true", help="Use simple type names")
    parser.add_argument("--direction", type=str, help="Text appended verbatim after @startuml")
    parser.add_argument("--output", "-o", type=str, help="Output file (default: stdout)")
    parser.add_argument("--svg", action="store_true", help="Render to SVG through a PlantUML server")
    parser.add_argument("--server-url", type=str, help="PlantUML server for --svg")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    return parser


def config_from_args(args: argparse.Namespace) -> DiagramConfig:
    """Load the config file (if any) and apply command line overrides."""
    config = load_config(args.config) if args.config else DiagramConfig()

    if args.source:
        config.source_paths = list(args.source)
    if args.package:
        config.scan_packages = list(args.package)
    if args.include is not None:
        config.include_pattern = args.include
    if args.exclude is not None:
        config.exclude_pattern = args.exclude
    if args.hide_class:
        config.hide_classes = list(args.hide_class)
    if args.direction is not None:
        config.diagram_direction = args.direction
    for flag in ("hide_fields", "hide_methods", "remove_fields", "remove_methods"):
        if getattr(args, flag):
            setattr(config, flag, True)
    if args.simplify:
        config.simplify_names = True
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for umlgen."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = config_from_args(args)
        logger.debug("Effective configuration: %s", config_to_dict(config))
        generator = ClassDiagramGenerator(config, JavaSourceScopeResolver())
        output = generator.generate_diagram_text()
        if args.svg:
            output = render_puml_to_svg(output, args.server_url)
    except (UmlGenError, ValueError, OSError) as e:
        logger.error(f"Diagram generation failed: {e}")
        return 1

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        logger.info(f"Wrote diagram to {args.output}")
    else:
        sys.stdout.write(output)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
