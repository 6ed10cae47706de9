"""System metadata written at the top of every report."""

from datetime import datetime

import psutil

from hostsweep.models.finding import TIMESTAMP_FORMAT

UNKNOWN = "Unknown"


def last_boot_time() -> str:
    """Return the host boot time as "yyyy-MM-dd HH:mm:ss".

    Never raises: an unavailable value is reported as "Unknown" and a
    failed lookup as "Error: <message>".
    """
    try:
        boot_timestamp = psutil.boot_time()
    except (psutil.Error, OSError) as e:
        return f"Error: {e}"

    if not boot_timestamp:
        return UNKNOWN
    return datetime.fromtimestamp(boot_timestamp).strftime(TIMESTAMP_FORMAT)


def last_reset_time() -> str:
    """Return the time of the last reset.

    The OS records a single boot timestamp, so this is the boot time.
    """
    return last_boot_time()
