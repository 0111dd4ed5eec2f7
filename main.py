"""Command line entrypoint to ingest one wardrobe photo locally."""

import argparse
import dataclasses
import json
import sys

from ingest_app.app import WardrobeIngestApp
from ingest_app.config import IngestConfig


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Extract garments from a photo into the wardrobe store.")
    parser.add_argument("image", help="Image URL, data URL or local path")
    parser.add_argument("--owner", required=True, help="Owner identifier for the stored records")
    args = parser.parse_args(argv)

    # Local files are only readable from the command line.
    config = dataclasses.replace(IngestConfig.from_env(), allow_local_images=True)
    app = WardrobeIngestApp(config=config)
    result = app.ingest_request({"ownerId": args.owner, "imageReference": args.image})
    print(json.dumps(result, indent=2))
    return 0 if result["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
