"""Tests for the pagesmith.util package."""

from __future__ import annotations

import base64

from pagesmith.util import random_128_bits, resource_url


def test_random_128_bits() -> None:
    value = random_128_bits()
    assert len(value) == 22
    assert "=" not in value
    assert len(base64.urlsafe_b64decode(value + "==")) == 16
    assert random_128_bits() != value


def test_resource_url() -> None:
    res_url = resource_url("https://example.com/static")
    assert res_url("css", "main.css") == (
        "https://example.com/static/css/main.css"
    )
    assert res_url("/js/", "/app.js") == "https://example.com/static/js/app.js"

    res_url = resource_url("https://example.com")
    assert res_url("img", "logo.png") == "https://example.com/img/logo.png"

    res_url = resource_url("/assets/?v=3")
    assert res_url("css", "main.css") == "/assets/css/main.css?v=3"
