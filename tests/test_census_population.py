from __future__ import annotations

from typing import Any

import pytest
import requests

from leso_pipeline.enrich.census_population import POPULATION_VARIABLE, fetch_state_population
from leso_pipeline.errors import DataUnavailableError


class FakeResponse:
    def __init__(self, payload: Any = None, status: int = 200, bad_json: bool = False) -> None:
        self.payload = payload
        self.status_code = status
        self.bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        if self.bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, params: dict[str, str], timeout: float) -> FakeResponse:
        self.calls.append({"url": url, "params": params})
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def test_fetch_state_population_parses_payload() -> None:
    payload = [
        ["NAME", POPULATION_VARIABLE, "state"],
        ["California", "39283497", "06"],
        ["Puerto Rico", "3318447", "72"],
    ]
    session = FakeSession(FakeResponse(payload))
    pdf = fetch_state_population("secret", 2019, session=session)  # type: ignore[arg-type]

    assert pdf.set_index("region_name")["population"].to_dict() == {
        "California": 39283497,
        "Puerto Rico": 3318447,
    }
    call = session.calls[0]
    assert call["url"].endswith("/2019/acs/acs5")
    assert call["params"]["key"] == "secret"
    assert call["params"]["for"] == "state:*"


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("unreachable")),
        FakeSession(FakeResponse(status=503)),
        FakeSession(FakeResponse(bad_json=True)),
        FakeSession(FakeResponse(payload={"error": "bad"})),
        FakeSession(FakeResponse(payload=[["STATE", "X"], ["a", "b"]])),
    ],
)
def test_unavailable_service_raises(session: FakeSession) -> None:
    with pytest.raises(DataUnavailableError):
        fetch_state_population("secret", session=session)  # type: ignore[arg-type]


def test_missing_key_raises() -> None:
    with pytest.raises(DataUnavailableError):
        fetch_state_population("", session=FakeSession())  # type: ignore[arg-type]
