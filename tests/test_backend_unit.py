"""Tests for the FastAPI layer and its request-level helpers."""

from fractions import Fraction

import pytest
from fastapi.testclient import TestClient

from app import solver as api_solver
from app.main import app
from polyroots import ConvergenceError

client = TestClient(app)


# ── Formatting helpers ───────────────────────────────────────────────────

@pytest.mark.parametrize(
    "value,expected",
    [
        (7.0, "7"),
        (2.5, "2.5"),
        (3.0000000000001, "3"),
        (Fraction(1, 3), "1/3"),
        (complex(1.5, -2), "1.5 - 2i"),
        (1j, "i"),
        (-1j, "-i"),
    ],
)
def test_format_number(value, expected) -> None:
    assert api_solver.format_number(value) == expected


@pytest.mark.parametrize(
    "coefficients,expected",
    [
        ([1, -6, 11, -6], "x³ - 6x² + 11x - 6"),
        ([1, 0, -1], "x² - 1"),
        ([-1, 3], "-x + 3"),
        ([Fraction(1, 2), 0], "1/2x"),
        ([], "0"),
    ],
)
def test_format_polynomial(coefficients, expected) -> None:
    assert api_solver.format_polynomial(coefficients) == expected


def test_parse_coefficients() -> None:
    parsed = api_solver._parse_coefficients(["3", "-1/2", "2.5", "2^3"])
    assert parsed == [3, Fraction(-1, 2), 2.5, 8]
    assert complex(api_solver._parse_coefficient("3+4i")) == 3 + 4j
    assert complex(api_solver._parse_coefficient("-2j")) == -2j
    with pytest.raises(ValueError, match="not a number"):
        api_solver._parse_coefficient("abc")
    with pytest.raises(ValueError, match="at least one"):
        api_solver._parse_coefficients([])


# ── /api/roots ───────────────────────────────────────────────────────────

class TestRootsEndpoint:
    def test_integer_roots(self):
        resp = client.post("/api/roots", json={"coefficients": ["1", "-6", "11", "-6"]})
        assert resp.status_code == 200
        data = resp.json()
        assert data["roots"] == ["1", "2", "3"]
        assert data["degree"] == 3
        assert data["polynomial"] == "x³ - 6x² + 11x - 6"
        assert [s["step_number"] for s in data["steps"]] == [1, 2, 3]
        assert isinstance(data["summary"]["runtime_ms"], (int, float))

    def test_rational_and_complex_roots(self):
        resp = client.post("/api/roots", json={"coefficients": ["3", "-8", "3", "2"]})
        assert resp.json()["roots"] == ["-1/3", "1", "2"]

        resp = client.post("/api/roots", json={"coefficients": ["1", "0", "0", "0", "-1"]})
        assert resp.json()["roots"] == ["-1", "-i", "i", "1"]

    def test_fraction_input(self):
        resp = client.post("/api/roots", json={"coefficients": ["1/2", "-3/2", "1"]})
        assert resp.status_code == 200
        assert resp.json()["roots"] == ["1", "2"]

    def test_options_accepted(self):
        resp = client.post(
            "/api/roots",
            json={"coefficients": ["1", "-6", "11", "-6"], "options": {"iterations": 300, "loops": 4}},
        )
        assert resp.status_code == 200

    def test_invalid_options_rejected(self):
        resp = client.post(
            "/api/roots", json={"coefficients": ["1", "2"], "options": {"iterations": 0}},
        )
        assert resp.status_code == 422

    @pytest.mark.parametrize("coefficients", [[], ["5"], ["0", "0"], ["abc", "1"]])
    def test_bad_input_is_400(self, coefficients):
        resp = client.post("/api/roots", json={"coefficients": coefficients})
        assert resp.status_code == 400

    def test_convergence_failure_is_422(self, monkeypatch):
        def fail(*args, **kwargs):
            raise ConvergenceError("Failed to converge", x=1.0, y=0.5, displacement=0.1)

        monkeypatch.setattr(api_solver, "roots", fail)
        resp = client.post("/api/roots", json={"coefficients": ["1", "0", "0", "1"]})
        assert resp.status_code == 422
        assert "Failed to converge" in resp.json()["detail"]

    def test_unexpected_failure_is_500(self, monkeypatch):
        def fail(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(api_solver, "roots", fail)
        resp = client.post("/api/roots", json={"coefficients": ["1", "0", "0", "1"]})
        assert resp.status_code == 500
        assert resp.json()["detail"].startswith("Solver error")


# ── /api/quadratic and /api/divide ───────────────────────────────────────

def test_quadratic_endpoint() -> None:
    resp = client.post("/api/quadratic", json={"a": "1", "b": "-4-1i", "c": "3+3i"})
    assert resp.status_code == 200
    assert resp.json()["roots"] == ["3", "1 + i"]


def test_quadratic_endpoint_linear_and_degenerate() -> None:
    resp = client.post("/api/quadratic", json={"a": "0", "b": "2", "c": "1"})
    assert resp.json()["roots"] == ["-1/2"]

    resp = client.post("/api/quadratic", json={"a": "0", "b": "0", "c": "1"})
    assert resp.status_code == 400
    assert "A or B must be nonzero" in resp.json()["detail"]


def test_divide_endpoint() -> None:
    resp = client.post(
        "/api/divide", json={"dividend": ["1", "-12", "0", "-42"], "divisor": ["1", "-3"]},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["quotient"] == ["1", "-9", "-27"]
    assert data["remainder"] == ["-123"]
    assert data["quotient_polynomial"] == "x² - 9x - 27"


def test_divide_by_zero_polynomial() -> None:
    resp = client.post("/api/divide", json={"dividend": ["1", "2"], "divisor": ["0"]})
    assert resp.status_code == 400
