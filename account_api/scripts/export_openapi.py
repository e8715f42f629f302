"""
Write the OpenAPI document to a file for frontend clients. Run from project root:
  python -m account_api.scripts.export_openapi [PATH]
Defaults to ./openapi.json.
"""
import argparse
import json
import sys
from pathlib import Path

from account_api.main import app


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export the OpenAPI document as JSON.")
    parser.add_argument("path", nargs="?", default="openapi.json", help="Output file")
    args = parser.parse_args(argv)

    out_path = Path.cwd() / args.path
    out_path.write_text(json.dumps(app.openapi(), indent=2), encoding="utf-8")
    print(f"Exported: {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
