import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .arithmetic import parse_arithmetic
from .core import DEFAULT_MAX_STEPS, Strategy, is_normal_form, reduce_many
from .display import to_svg
from .errors import LambdaError
from .layout import ApplicationLink, LayoutOptions, layout
from .parser import parse

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tromp",
        description="Reduce a lambda calculus expression and draw its Tromp diagram",
    )
    parser.add_argument("expression", help="lambda expression, like '(λx.x) y'")
    parser.add_argument(
        "--math",
        action="store_true",
        help="read the expression as arithmetic on Church numerals, like '2 + 3'",
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in Strategy],
        default=Strategy.NORMAL.value,
    )
    parser.add_argument("--max-steps", type=int, default=DEFAULT_MAX_STEPS)
    parser.add_argument(
        "--style",
        choices=[s.value for s in ApplicationLink],
        default=ApplicationLink.LEFTMOST.value,
        help="which variable of the function the application connector starts from",
    )
    parser.add_argument("--unit", type=float, default=40, help="size of a grid cell")
    parser.add_argument("--no-names", action="store_true", help="do not label the diagram")
    parser.add_argument("--trace", action="store_true", help="print every reduction step")
    parser.add_argument("--svg", type=Path, help="write the diagram of the result there")
    parser.add_argument(
        "--table", action="store_true", help="print the nodes of the diagram as a table"
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = [logging.WARNING, logging.INFO, logging.DEBUG][min(args.verbose, 2)]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        term = parse_arithmetic(args.expression) if args.math else parse(args.expression)
        if args.max_steps < 0:
            raise ValueError(f"--max-steps must be non-negative, got {args.max_steps}")
        trace = reduce_many(term, args.strategy, args.max_steps)
        result = trace[-1]

        if args.trace:
            for i, t in enumerate(trace):
                print(f"{i}: {t}")
        else:
            print(result)
        if not is_normal_form(result, args.strategy):
            logger.warning("no normal form after %d steps", args.max_steps)

        options = LayoutOptions(
            unit=args.unit,
            application_link=ApplicationLink(args.style),
            show_names=not args.no_names,
        )
        diagram = layout(result, options)
        if args.table:
            nodes, _links = diagram.to_frames()
            print(nodes)
        if args.svg is not None:
            args.svg.write_text(to_svg(diagram), encoding="utf-8")
            logger.info("diagram written to %s", args.svg)
    except RecursionError:
        print("error: the term is nested too deeply", file=sys.stderr)
        return 1
    except (LambdaError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
