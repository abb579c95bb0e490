"""Print position fixes from the GNSS receiver on $GPS_SERIAL_PORT.

Usage::

    GPS_SERIAL_PORT=/dev/ttyUSB0 python main.py

Each RMC fix is written to stdout as ``Latitude::<lat>\\tLongitude::<lon>``.
Press Ctrl+C to stop.
"""

import sys

from gpsfeed.app import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
