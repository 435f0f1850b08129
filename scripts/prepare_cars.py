"""Download the cars dataset for offline training."""

from __future__ import annotations

import argparse
from pathlib import Path

from mpg_regression.data import CARS_DATA_URL, download_dataset


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Download the cars dataset")
    parser.add_argument("--url", type=str, default=CARS_DATA_URL, help="Dataset location")
    parser.add_argument(
        "--out-dir",
        type=str,
        default="data",
        help="Directory to store the downloaded dataset",
    )
    parser.add_argument(
        "--filename",
        type=str,
        default="carsData.json",
        help="Name of the stored JSON file",
    )
    parser.add_argument("--timeout", type=float, default=30.0, help="Request timeout in seconds")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Re-download even if the target file already exists",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    destination = Path(args.out_dir) / args.filename
    print(f"Downloading {args.url} -> {destination}")
    if download_dataset(args.url, destination, force=args.force, timeout=args.timeout):
        print("Download complete.")
    else:
        print(f"Dataset already exists at {destination}, skipping download.")


if __name__ == "__main__":
    main()
