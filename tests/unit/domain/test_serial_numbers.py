"""Unit tests for serial number ordering."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from vvote_verifier.domain.errors.malformed_input import SerialNumberError
from vvote_verifier.domain.primitives.serial_numbers import (
    serial_sort_key,
    sort_serial_numbers,
)


class TestSerialOrdering:
    """Tests for the canonical serial number comparator."""

    def test_numeric_suffix_compared_numerically(self) -> None:
        assert sort_serial_numbers(["Printer1:10", "Printer1:9", "Printer1:100"]) == [
            "Printer1:9",
            "Printer1:10",
            "Printer1:100",
        ]

    @pytest.mark.parametrize(
        ("serial_no", "expected"),
        [
            ("Printer1:2147483647", ("Printer1", 2147483647)),
            ("Printer1:-2147483648", ("Printer1", -2147483648)),
            ("Printer1:+5", ("Printer1", 5)),
            ("Printer1:007", ("Printer1", 7)),
        ],
    )
    def test_signed_32_bit_suffix_accepted(
        self, serial_no: str, expected: tuple[str, int]
    ) -> None:
        assert serial_sort_key(serial_no) == expected

    def test_device_compared_first(self) -> None:
        assert sort_serial_numbers(["Printer2:1", "Printer10:5", "Printer1:7"]) == [
            "Printer1:7",
            "Printer10:5",
            "Printer2:1",
        ]

    @pytest.mark.parametrize(
        "serial_no",
        [
            "Printer1",
            "Printer1:x",
            "",
            "Printer1:1_0",
            "Printer1: 7",
            "Printer1:7 ",
            "Printer1:+",
            "Printer1:\u0663",
            "Printer1:2147483648",
            "Printer1:-2147483649",
        ],
    )
    def test_malformed_serial_rejected(self, serial_no: str) -> None:
        with pytest.raises(SerialNumberError) as exc_info:
            serial_sort_key(serial_no)

        assert exc_info.value.serial_no == serial_no

    @given(
        st.lists(
            st.tuples(
                st.sampled_from(["Printer1", "Printer2", "PrinterA"]),
                st.integers(min_value=0, max_value=10_000),
            ),
            unique=True,
        )
    )
    def test_order_independent_of_input_order(
        self, parts: list[tuple[str, int]]
    ) -> None:
        """Test that sorting is a total order on well-formed serials."""
        serials = [f"{device}:{n}" for device, n in parts]

        forward = sort_serial_numbers(serials)
        backward = sort_serial_numbers(list(reversed(serials)))

        assert forward == backward
        assert [serial_sort_key(s) for s in forward] == sorted(parts)
