"""
ChainLog command line

Loads programs written in text notation, runs forward chaining and
prints the final fact set.
"""

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from .config import ChainLogConfig, set_config
from .engine import ForwardChainingEngine, InferenceStatus, create_philosophers_engine
from .errors import ChainLogError, IterationCapExceeded
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_ITERATION_CAP = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chainlog",
        description="Forward-chaining inference over facts and rules",
    )
    parser.add_argument("programs", nargs="*", metavar="PROGRAM",
                        help="Program files: one fact or rule per line")
    parser.add_argument("--demo", action="store_true",
                        help="Load the Socrates demonstration knowledge base")
    parser.add_argument("--max-iterations", type=int,
                        help="Cap on inference passes (overrides config)")
    parser.add_argument("--config", help="Path to a YAML or JSON config file")
    parser.add_argument("--log-level", help="Logging level (overrides config)")
    parser.add_argument("--json-logs", action="store_true",
                        help="Emit structured JSON log records")
    parser.add_argument("--strict", action="store_true",
                        help="Exit with status 2 if the iteration cap is hit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    try:
        config = ChainLogConfig.load(args.config)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    set_config(config)

    try:
        setup_logging(
            log_level=args.log_level or config.log_level,
            log_file=config.log_file,
            enable_structured_logging=args.json_logs or config.structured_logging,
        )
    except (OSError, ValueError) as e:
        print(f"Error configuring logging: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    max_iterations = args.max_iterations
    if max_iterations is None:
        max_iterations = config.inference.max_iterations
    try:
        if args.demo:
            engine = create_philosophers_engine(max_iterations)
        else:
            engine = ForwardChainingEngine(max_iterations)

        for path in args.programs:
            with open(path, 'r', encoding='utf-8') as f:
                engine.add_program(f.read())
            logger.info(f"Loaded program from {path}")
    except (OSError, ValueError, ChainLogError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    result = engine.infer()

    print(f"--- Final Inferred Facts ({len(result)}) ---")
    for fact in sorted(result, key=str):
        print(f"- {fact}")
    print(f"Status: {result.status.value} after {result.iterations} iteration(s), "
          f"{len(result.derived)} derived")

    if args.strict:
        try:
            result.raise_for_status()
        except IterationCapExceeded as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ITERATION_CAP
    elif result.status is InferenceStatus.ITERATION_CAP_EXCEEDED:
        print("Warning: iteration cap reached before a fixpoint", file=sys.stderr)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
