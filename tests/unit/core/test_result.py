"""Unit tests for the Ok/Err result type."""

import pytest

from docgraph.core.errors import EmptyInputError
from docgraph.core.result import Err, Ok


class TestResult:
    def test_ok(self):
        result = Ok(3)
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == 3

    def test_err(self):
        result = Err("boom")
        assert result.is_err()
        assert not result.is_ok()
        with pytest.raises(ValueError, match="boom"):
            result.unwrap()

    def test_err_unwrap_reraises_exception(self):
        with pytest.raises(EmptyInputError):
            Err(EmptyInputError()).unwrap()
