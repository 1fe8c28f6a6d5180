"""Entry point for: python -m third_party_summary"""

import asyncio
import sys

from .cli import main, parse_args

if __name__ == "__main__":
    args = parse_args(sys.argv[1:])
    sys.exit(asyncio.run(main(args)))
