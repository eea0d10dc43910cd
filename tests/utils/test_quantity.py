# tests/utils/test_quantity.py

from decimal import Decimal

import pytest

from noderesources.core.exceptions import QuantityParseError
from noderesources.utils.quantity import (
    display_to_float,
    format_cpu,
    format_memory,
    parse_optional_quantity,
    parse_quantity,
    to_gigabytes,
    to_millicores,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("4", Decimal(4)),
        ("500m", Decimal("0.5")),
        ("1.5", Decimal("1.5")),
        ("250000000n", Decimal("0.25")),
        ("1500u", Decimal("0.0015")),
        ("1Ki", Decimal(1024)),
        ("256Mi", Decimal(256 * 1024**2)),
        ("16Gi", Decimal(16 * 1024**3)),
        ("1Ti", Decimal(1024**4)),
        ("16G", Decimal(16 * 10**9)),
        ("2k", Decimal(2000)),
        ("12e6", Decimal(12_000_000)),
        ("1E", Decimal(10**18)),
        (".5", Decimal("0.5")),
        (7, Decimal(7)),
    ],
)
def test_parse_quantity_units(raw, expected):
    assert parse_quantity(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "1.2.3", "10 Gi", "5Xi", "Gi", "1e", None, 1.5, True])
def test_parse_quantity_rejects_invalid(raw):
    with pytest.raises(QuantityParseError):
        parse_quantity(raw)


@pytest.mark.parametrize("raw", ["1e1000000", "9e999998", "1e99999999999999999999", "1e30", Decimal("Infinity"), Decimal("NaN")])
def test_parse_quantity_rejects_out_of_range(raw):
    with pytest.raises(QuantityParseError, match="out of range"):
        format_memory(parse_quantity(raw))


def test_parse_error_is_a_value_error_and_keeps_input():
    with pytest.raises(ValueError) as excinfo:
        parse_quantity("lots")
    assert excinfo.value.quantity == "lots"


def test_parse_optional_quantity_treats_absent_as_zero():
    assert parse_optional_quantity(None) == Decimal(0)
    assert parse_optional_quantity("100m") == Decimal("0.1")


@pytest.mark.parametrize(
    "cores_input, millicores_input",
    [("2.5", "2500m"), ("1", "1000m"), ("0.2", "200m"), ("0", "0m"), ("0.125", "125m"), ("3.333", "3333m")],
)
def test_cpu_display_identical_for_cores_and_millicores(cores_input, millicores_input):
    assert format_cpu(parse_quantity(cores_input)) == format_cpu(parse_quantity(millicores_input))


@pytest.mark.parametrize(
    "raw, expected",
    [("2.5", "2.50"), ("500m", "0.50"), ("1", "1.00"), ("200m", "0.20"), ("0", "0.00"), ("64", "64.00")],
)
def test_format_cpu_two_decimals(raw, expected):
    assert format_cpu(parse_quantity(raw)) == expected


def test_millicores_round_up_fractions():
    # 1.5 millicores is reported as 2m, like Kubernetes' ScaledValue.
    assert to_millicores(parse_quantity("1500u")) == 2
    assert format_cpu(parse_quantity("1500u")) == "0.00"
    assert format_cpu(parse_quantity("1234567n")) == "0.00"
    assert to_millicores(parse_quantity("1234567n")) == 2


@pytest.mark.parametrize(
    "raw",
    ["16G", "16Gi", "256Mi", "999999999", "1000000000", "100Mi", "4Ti", "32883432Ki", "0"],
)
def test_memory_display_is_floor_of_bytes_over_1e9(raw):
    num_bytes = parse_quantity(raw)
    assert format_memory(num_bytes) == f"{int(num_bytes) // 10**9}Gi"


def test_memory_display_examples():
    assert format_memory(parse_quantity("16G")) == "16Gi"
    assert format_memory(parse_quantity("16Gi")) == "17Gi"
    assert format_memory(parse_quantity("512Mi")) == "0Gi"
    assert to_gigabytes(Decimal("1999999999")) == 1


def test_display_to_float_round_trip_formats():
    assert display_to_float("2.50") == 2.5
    assert display_to_float("16Gi") == 16.0
    with pytest.raises(QuantityParseError):
        display_to_float("n/a")
