# SPDX-License-Identifier: MIT

from timbers.terminal.app import run

__version__ = "0.1.0"


def main() -> None:
    run()


if __name__ == "__main__":
    main()
