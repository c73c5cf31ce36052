import argparse
import sys
from typing import Optional

from swiftlink.client.client_blocking import SwiftlinkClient
from swiftlink.client.errors import SwiftlinkClientError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="swiftlink", description="Command-line client for a swiftlink server")
    parser.add_argument("-b", "--base-url", required=True, help="Server root, e.g. http://localhost:8080")

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a new short link")
    create.add_argument("url", help="The URL to shorten")

    info = subparsers.add_parser("info", help="Get information about a short link")
    info.add_argument("code", help="The code of the short link")

    delete = subparsers.add_parser("delete", help="Delete a short link")
    delete.add_argument("code", help="The code of the short link to delete")
    delete.add_argument("-t", "--token", required=True, help="Bearer token for authentication")

    return parser


def run(args: argparse.Namespace, client: SwiftlinkClient) -> None:
    if args.command == "create":
        response = client.create_link(args.url)
        print(f"Short link created: {response.code}")
    elif args.command == "info":
        response = client.get_link_info(args.code)
        print(f"Link info for {response.code}: URL = {response.url}, Created At = {response.created_at}")
    elif args.command == "delete":
        client.delete_link(args.code, args.token)
        print(f"Link {args.code} deleted.")


def main(argv=None, client: Optional[SwiftlinkClient] = None) -> int:
    args = build_parser().parse_args(argv)
    client = client or SwiftlinkClient(args.base_url)
    try:
        run(args, client)
    except SwiftlinkClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
