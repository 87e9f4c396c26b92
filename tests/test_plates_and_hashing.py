import pytest

from cartrace.catalog import VIN_ALPHABET
from cartrace.errors import PlateValidationError
from cartrace.hashing import composite_seed, stable_hash
from cartrace.plates import mask_plate, normalize_plate, validate_plate
from cartrace.vin import VIN_LENGTH, synthetic_vin


def test_normalize_plate():
    assert normalize_plate("  ab123cd ") == "AB123CD"
    assert normalize_plate(None) == ""


@pytest.mark.parametrize(
    "plate, masked",
    [("AB", "**"), ("A", "**"), ("", "**"), ("AB12", "A**2"), ("ABC", "A**C"), ("AB123CD", "AB***CD"), ("ab123cd", "AB***CD")],
)
def test_mask_plate(plate, masked):
    assert mask_plate(plate) == masked


def test_validate_plate():
    assert validate_plate(" ab123cd ") == "AB123CD"
    with pytest.raises(PlateValidationError, match="Missing plate"):
        validate_plate("   ")
    with pytest.raises(PlateValidationError, match="Missing plate"):
        validate_plate(None)
    with pytest.raises(PlateValidationError, match="Invalid plate"):
        validate_plate("AB1", min_length=5)


def test_stable_hash_known_values():
    # FNV-1a 32-bit reference vectors
    assert stable_hash("") == 0x811C9DC5
    assert stable_hash("a") == 0xE40C292C
    assert stable_hash("foobar") == 0xBF9CF968


def test_composite_seed_uses_pipe_separator():
    assert composite_seed("AB123CD", 2) == stable_hash("AB123CD|2")
    assert composite_seed("AB123CD", 0) != composite_seed("AB123CD", 1)


def test_synthetic_vin_shape():
    for seed in (0, 1, 17, 12345, 2**32 - 1):
        vin = synthetic_vin(seed)
        assert len(vin) == VIN_LENGTH
        assert set(vin) <= set(VIN_ALPHABET)
        assert not set(vin) & {"I", "O", "Q"}


def test_synthetic_vin_prefix_is_manufacturer_code():
    assert synthetic_vin(0).startswith("ZFA")
    assert synthetic_vin(1).startswith("WV1")
    assert synthetic_vin(6).startswith("ZFA")


def test_stable_hash_accepts_lone_surrogates():
    h = stable_hash("AB\ud800CD")
    assert h == stable_hash("AB\ud800CD")
    assert h != stable_hash("ABCD")


def test_validate_plate_rejects_lone_surrogates():
    with pytest.raises(PlateValidationError, match="Invalid plate"):
        validate_plate("AB\ud800CD")
    with pytest.raises(PlateValidationError, match="Invalid plate"):
        validate_plate("AB123\udfff", min_length=5)
