#!/usr/bin/env python3
"""
JNI Export Generator

Reads a manifest of export annotations and generates:
  1. A C header declaring every JNI export
  2. A C source defining each export as a call to its user function

Usage:
    python generate_exports.py exports.jni --output-dir generated/
    python generate_exports.py exports.jni -o generated/ --namespace example --verbose
"""

import argparse
import logging
import re
import sys
import time
from pathlib import Path

# Add parent directory to path so jniexport package can be found
sys.path.insert(0, str(Path(__file__).parent.parent))

from jniexport import ExportGenerator, ManifestParser, JniExportError

logger = logging.getLogger("jniexport.cli")


def c_identifier(name: str) -> str:
    """Make a name usable in file names and include guards"""
    name = re.sub(r"[^A-Za-z0-9_]", "_", name)
    if not name or name[0].isdigit():
        name = f"_{name}"
    return name


def main(argv=None) -> int:
    start_time = time.perf_counter()

    parser = argparse.ArgumentParser(description="Generate JNI exports from a manifest")
    parser.add_argument("manifest", nargs="?", help="Path to manifest file (positional)")
    parser.add_argument("--manifest", dest="manifest_opt", help="Path to manifest file (alternative)")
    parser.add_argument("--output-dir", "-o", default="generated", help="Output directory")
    parser.add_argument("--namespace", "-n", default="", help="Prefix for generated file names")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    manifest_file = args.manifest or args.manifest_opt
    if not manifest_file:
        parser.error("manifest file is required (positional or --manifest)")

    manifest_path = Path(manifest_file)
    namespace = c_identifier(args.namespace or manifest_path.stem)

    # Entries are resolved one by one so a bad entry only drops that export
    try:
        entries = ManifestParser(manifest_path.read_text(encoding="utf-8")).parse()
    except JniExportError as e:
        logger.error("%s: %s", manifest_path, e)
        return 1

    failed = 0
    requests = []
    for entry in entries:
        try:
            requests.append(entry.to_request())
        except JniExportError as e:
            logger.error("%s:%d: %s", manifest_path, entry.line, e)
            failed += 1

    generator = ExportGenerator(namespace)
    stubs, failures = generator.generate_all(requests)
    failed += len(failures)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    header = f"{namespace}_exports.h"
    files = {
        header: generator.generate_header(stubs),
        f"{namespace}_exports.c": generator.generate_impl(stubs, header),
    }

    for filename, content in files.items():
        path = output_dir / filename
        path.write_text(content + "\n", encoding="utf-8")
        print(f"Generated: {path}")

    elapsed = time.perf_counter() - start_time
    print(f"Generated {len(stubs)} export(s), {failed} failed in {elapsed*1000:.2f} ms")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
