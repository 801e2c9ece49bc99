#!/usr/bin/env python3
"""
Show which tracer the current environment resolves to.

Usage:
    python scripts/inspect_tracer.py
    python scripts/inspect_tracer.py -Dtracer.class=my_pkg.tracers.JaegerTracer
    ZIPKIN_SERVER_URL=http://zipkin:9411 python scripts/inspect_tracer.py --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Allow running from a source checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from tracer_resolver import TracerResolver, properties  # noqa: E402


def main(argv=None) -> int:
    argv = properties.load_properties(sys.argv[1:] if argv is None else argv)

    parser = argparse.ArgumentParser(
        description="Resolve a tracer from the environment and print the outcome"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full resolver state as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging from the resolver",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    resolver = TracerResolver()
    tracer = resolver.resolve()

    if args.json:
        print(json.dumps(resolver.get_tracer_config(), indent=2))
    else:
        report = resolver.last_report
        if tracer is None:
            print("✗ No tracer resolved")
        else:
            print(f"✓ {report.tracer_type} (via {report.strategy})")
        for failure in report.failures:
            print(f"  - {failure}")

    return 0 if tracer is not None else 1


if __name__ == "__main__":
    sys.exit(main())
