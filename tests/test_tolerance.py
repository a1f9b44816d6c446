"""Tests for dtype validation and tolerance presets."""

from __future__ import annotations

import numpy as np
import pytest

from polyspace.tolerance import (
    _ensure_float_dtype,
    get_conservative_tolerance,
    get_default_tolerance,
    get_machine_epsilon,
    get_strict_tolerance,
)


class TestTolerance:
    """Test suite for tolerance utilities."""

    @pytest.mark.parametrize(
        ("getter", "expected_f32", "expected_f64"),
        [
            (get_default_tolerance, 1e-6, 1e-12),
            (get_strict_tolerance, 1e-7, 1e-15),
            (get_conservative_tolerance, 1e-5, 1e-10),
        ],
    )
    def test_presets(self, getter: object, expected_f32: float, expected_f64: float) -> None:
        """Test each preset for both supported dtypes and dtype spellings."""
        assert getter(np.float32) == expected_f32  # type: ignore[operator]
        assert getter("float64") == expected_f64  # type: ignore[operator]
        assert getter(np.dtype(np.float64)) == expected_f64  # type: ignore[operator]

    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_machine_epsilon(self, dtype: type) -> None:
        """Test get_machine_epsilon against np.finfo."""
        assert get_machine_epsilon(dtype) == np.finfo(dtype).eps

    @pytest.mark.parametrize("dtype", [np.int32, "int64", np.complex64, np.float16])
    def test_unsupported_dtype_raises(self, dtype: object) -> None:
        """Test that only float32 and float64 are accepted."""
        with pytest.raises(ValueError, match="Unsupported dtype"):
            get_default_tolerance(dtype)  # type: ignore[arg-type]
        with pytest.raises(ValueError, match="Unsupported dtype"):
            _ensure_float_dtype(dtype)  # type: ignore[arg-type]

    def test_ensure_float_dtype_normalizes(self) -> None:
        """Test that dtype-likes are normalized to numpy dtypes."""
        assert _ensure_float_dtype("float32") == np.dtype(np.float32)
        assert _ensure_float_dtype(float) == np.dtype(np.float64)
