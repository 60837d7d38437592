"""Entry point for `python -m themekit`."""

import sys


def main():
    from themekit.app import run
    sys.exit(run())


if __name__ == "__main__":
    main()
