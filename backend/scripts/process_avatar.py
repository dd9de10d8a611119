"""Upload an image through a running avatar processor and save the result.

Usage:
  python scripts/process_avatar.py photo.jpg
  python scripts/process_avatar.py photo.jpg --base-url http://localhost:8000 --out ./avatars
  python scripts/process_avatar.py --health
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import httpx

from avatar_processor.config import settings
from avatar_processor.page.controller import AvatarProcessor, SelectedFile
from avatar_processor.utils.helpers import format_file_size


def print_endpoint(client: httpx.Client, path: str) -> int:
    try:
        response = client.get(path)
        print(f"{path} -> {response.status_code}")
        print(response.text)
    except httpx.HTTPError as exc:
        print(f"{path} -> Network error: {exc}")
        return 1
    return 0 if response.status_code < 400 else 1


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("image", nargs="?", help="Image file to process")
    parser.add_argument("--base-url", default=settings.PAGE_API_BASE_URL, help="Avatar processor base URL")
    parser.add_argument("--out", default=".", help="Directory to save the processed avatar")
    parser.add_argument("--no-download", action="store_true", help="Do not download the processed avatar")
    parser.add_argument("--health", action="store_true", help="Print /api/health and exit")
    parser.add_argument("--info", action="store_true", help="Print /api/info and exit")
    args = parser.parse_args()

    client = httpx.Client(base_url=args.base_url, timeout=settings.AVATAR_API_TIMEOUT_SECONDS)
    processor = AvatarProcessor(client)
    try:
        if args.health or args.info:
            code = 0
            if args.health:
                code |= print_endpoint(client, "/api/health")
            if args.info:
                code |= print_endpoint(client, "/api/info")
            return code

        if not args.image:
            parser.error("image is required unless --health or --info is given")

        processor.handle_file_select(SelectedFile.from_path(args.image))
        if processor.error is not None:
            print(f"Error: {processor.error}")
            return 1

        result = processor.result
        details = result.processing_details
        print("Avatar created")
        print(f"  avatar_id: {result.avatar_id}")
        print(f"  original_filename: {result.original_filename}")
        print(f"  processed_image_url: {result.processed_image_url}")
        print(f"  face_detected: {'Yes' if details.face_detected else 'No'}")
        print(f"  cropped: {'Yes' if details.cropped else 'No'}")
        print(f"  background_removed: {'Yes' if details.background_removed else 'No'}")
        print(f"  size: {details.size or 'N/A'}")
        print(f"  original_size: {format_file_size(details.original_size_bytes)}")
        print(f"  processed_size: {format_file_size(details.processed_size_bytes)}")

        if not args.no_download:
            downloaded = processor.download_image()
            if downloaded is None:
                print(f"Error: {processor.error}")
                return 1
            os.makedirs(args.out, exist_ok=True)
            print(f"  saved: {downloaded.save(args.out)}")
        return 0
    finally:
        processor.close()


if __name__ == "__main__":
    sys.exit(main())
