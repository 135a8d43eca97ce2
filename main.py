import sys
from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True), override=True)

from leafmint.cli import main

if __name__ == "__main__":
    sys.exit(main())
