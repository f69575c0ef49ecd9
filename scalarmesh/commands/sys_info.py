import argparse

from .. import sys_info


def run():
    """Run the sys_info command-line helper.

    Parses CLI arguments and delegates to :func:`scalarmesh.sys_info`, which
    prints platform details and the versions of the declared dependencies.
    """
    parser = argparse.ArgumentParser(
        prog=f"{__package__.split('.')[0]}-sys_info", description="sys_info"
    )
    parser.add_argument(
        "--developer",
        help="also display the test dependencies",
        action="store_true",
    )
    args = parser.parse_args()

    sys_info(developer=args.developer)
