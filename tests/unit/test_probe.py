# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from alive.check.probe import Prober
from alive.errors import FailureKind
from alive.http import StubHttpClient
from alive.http.models import HttpResponse
from alive.models import ProbeOutcome, ProbeState


def test_probe_up_without_declared_length():
    stub = StubHttpClient({"https://example.com": HttpResponse(ok=True, status_code=200)})
    outcome = Prober(stub).probe("https://example.com", 2.5)

    assert outcome.state is ProbeState.UP
    assert outcome.status_code == 200
    assert outcome.content_length is None
    assert outcome.note is None
    assert outcome.latency is not None and outcome.latency >= 0
    assert stub.requests[0].method == "GET"
    assert stub.requests[0].timeout == 2.5


@pytest.mark.parametrize(("status", "state"), [(200, ProbeState.UP), (301, ProbeState.UP), (399, ProbeState.UP), (400, ProbeState.WARN), (404, ProbeState.WARN), (503, ProbeState.WARN)])
def test_probe_status_thresholds(status, state):
    stub = StubHttpClient({"http://h": HttpResponse(ok=True, status_code=status, headers={"Content-Length": "5"})})
    outcome = Prober(stub).probe("http://h", 1.0)
    assert outcome.state is state
    assert outcome.status_code == status
    assert outcome.content_length == 5
    assert outcome.note is None


def test_probe_zero_length_is_absent():
    stub = StubHttpClient({"http://h": HttpResponse(ok=True, status_code=204, headers={"content-length": "0"})})
    assert Prober(stub).probe("http://h", 1.0).content_length is None


@pytest.mark.parametrize("kind", list(FailureKind))
def test_probe_transport_failure_is_down_with_reason(kind):
    stub = StubHttpClient({"http://h": HttpResponse.failure(kind, "raw error text")})
    outcome = Prober(stub).probe("http://h", 1.0)
    assert outcome.state is ProbeState.DOWN
    assert outcome.note == kind.value
    assert outcome.status_code is None
    assert outcome.content_length is None
    assert outcome.latency is not None


def test_probe_unclassified_failure_degrades_to_error():
    stub = StubHttpClient({"http://h": HttpResponse(ok=False, error_message="weird protocol violation")})
    assert Prober(stub).probe("http://h", 1.0).note == "error"


def test_probe_revalidates_and_skips_network():
    stub = StubHttpClient()
    outcome = Prober(stub).probe("  htp:/bad ", 1.0)
    assert outcome == ProbeOutcome.invalid("htp:/bad", "bad url")
    assert outcome.latency is None
    assert stub.requests == []


def test_probe_passes_redirect_policy():
    stub = StubHttpClient({"http://h": HttpResponse(ok=True, status_code=302)})
    Prober(stub, allow_redirects=False).probe("http://h", 1.0)
    assert stub.requests[0].allow_redirects is False


def test_outcome_to_dict():
    outcome = ProbeOutcome.responded("http://h", status_code=200, latency=0.1234, content_length=10)
    assert outcome.to_dict() == {
        "target": "http://h",
        "state": "up",
        "status_code": 200,
        "latency_ms": 123,
        "content_length": 10,
        "note": None,
    }
