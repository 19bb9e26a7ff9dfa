"""CLI entry point: run `tsshape file.ts` or `python -m tsshape file.ts`."""

import logging
import sys
from pathlib import Path

from .utils.config import EXIT_OK, EXIT_ERROR, EXIT_NOT_EQUIVALENT


def main(argv=None) -> int:
    import argparse
    from .compiler.driver import ExtractionDriver
    from .analysis.equivalence import EquivalenceChecker
    from .ir.serialization import serialize_shape, shapes_to_json

    parser = argparse.ArgumentParser(
        prog="tsshape",
        description="Extract canonical shape descriptors from TypeScript declarations.",
    )
    parser.add_argument("file", type=Path, help="Path to .ts source file")
    parser.add_argument("--format", choices=("sexpr", "json"), default="sexpr", help="Output format (default: sexpr)")
    parser.add_argument("--compare", action="store_true",
                        help="Compare all forms declared under the same name; exit 2 if any differ")
    parser.add_argument("--strict-implicit", action="store_true",
                        help="Treat unannotated fields as distinct from `any` when comparing")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log skipped members and merge decisions")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = args.file.resolve()
    if not path.exists():
        sys.stderr.write(f"tsshape: error: file not found: {path}\n")
        return EXIT_ERROR
    if not path.is_file():
        sys.stderr.write(f"tsshape: error: not a file: {path}\n")
        return EXIT_ERROR

    try:
        result = ExtractionDriver().extract_file(path)
    except (OSError, ValueError) as e:
        sys.stderr.write(f"tsshape: error: {e}\n")
        return EXIT_ERROR

    for notice in result.notices:
        sys.stderr.write(f"{notice}\n")

    if args.format == "json":
        sys.stdout.write(shapes_to_json(result.shapes) + "\n")
    else:
        for shape in result.shapes:
            sys.stdout.write(serialize_shape(shape) + "\n")

    if result.has_errors():
        result.reporter.print_errors()
        return EXIT_ERROR

    if args.compare:
        checker = EquivalenceChecker(implicit_matches_any=not args.strict_implicit)
        differing = False
        for name in result.names:
            for left, right, outcome in result.compare_forms(name, checker):
                if outcome:
                    continue
                differing = True
                sys.stderr.write(f"{name}: {left.kind.value} and {right.kind.value} differ\n")
                for mismatch in outcome.mismatches:
                    sys.stderr.write(f"  {mismatch}\n")
        if differing:
            return EXIT_NOT_EQUIVALENT

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
