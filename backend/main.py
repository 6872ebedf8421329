import argparse
import logging
import sys
from pathlib import Path

from config import env_settings
from app.ui.client import StudioClient, load_file


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Restyle an image through the Image Studio API.")
    parser.add_argument("image", type=Path, help="image file to transform")
    parser.add_argument("--style", help="style label, defaults to the server's default style")
    parser.add_argument("--out", type=Path, help="where to save the transformed image")
    parser.add_argument("--api", default=env_settings.studio.base_url, help="Image Studio API base URL")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)

    with StudioClient(args.api, timeout=env_settings.studio.timeout) as client:
        styles = client.list_styles()
        if args.style:
            if args.style not in styles:
                logging.warning("Style %r is not one of %s", args.style, ", ".join(styles))
            client.select_style(args.style)

        client.select_file(load_file(args.image))
        print(f"Transforming {args.image} into {client.state.style}...")
        url = client.transform()
        if url is None:
            print("Transformation failed", file=sys.stderr)
            return 1

        print(f"Transformed image: {url}")
        saved = client.download(args.out)
        print(f"Saved transformed image to {saved}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
