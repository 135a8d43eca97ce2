import argparse
import sys

from .config import load_config
from .errors import IssueError
from .logger import configure_logging
from .service import LeafService

def main(argv=None):
    parser = argparse.ArgumentParser(description="Mint leaf certificates signed by the local root CA")
    parser.add_argument("hosts", nargs="+", help="hostname(s) to issue for")
    parser.add_argument("--key", action="store_true", help="also print the PEM private key")
    args = parser.parse_args(argv)

    config = load_config()
    configure_logging(config.log_path)
    service = LeafService(config)

    for host in args.hosts:
        try:
            issued = service.certificate_for_host(host)
        except IssueError as e:
            print(f"▸ {host}: {e}", file=sys.stderr)
            return 1
        sys.stdout.write(issued.certificate_pem().decode())
        if args.key:
            sys.stdout.write(issued.private_key_pem().decode())
    return 0
