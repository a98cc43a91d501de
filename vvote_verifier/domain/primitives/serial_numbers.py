"""Serial number ordering.

Ballot serial numbers have the form ``<device>:<n>``. The canonical order
compares the device part lexicographically, then ``n`` numerically, so
``Printer1:9`` sorts before ``Printer1:10``. ``n`` is a signed 32-bit
decimal: an optional sign followed by ASCII digits only.
"""

from typing import Iterable

from vvote_verifier.domain.errors.malformed_input import SerialNumberError

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


def _parse_int32(number: str) -> int | None:
    digits = number[1:] if number[:1] in ("+", "-") else number
    if not (digits.isascii() and digits.isdigit()):
        return None
    value = int(number)
    if not INT32_MIN <= value <= INT32_MAX:
        return None
    return value


def serial_sort_key(serial_no: str) -> tuple[str, int]:
    """Sort key for a serial number.

    Raises:
        SerialNumberError: If the serial number has no ':' or its suffix is
            not a signed 32-bit decimal.
    """
    device, sep, number = serial_no.partition(":")
    value = _parse_int32(number) if sep else None
    if value is None:
        raise SerialNumberError(serial_no)
    return device, value


def sort_serial_numbers(serial_numbers: Iterable[str]) -> list[str]:
    """Return the serial numbers in canonical order."""
    return sorted(serial_numbers, key=serial_sort_key)
