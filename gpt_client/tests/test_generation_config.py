"""GenerationConfig clamping, defaults and builder parity."""
from __future__ import annotations

import dataclasses

import pytest

from gpt_client.base.models import GenerationConfig


def test_defaults():
    cfg = GenerationConfig()
    assert cfg.temperature == 0.7
    assert cfg.max_tokens == 800
    assert cfg.top_p == 0.95
    assert cfg.frequency_penalty == 0.0
    assert cfg.presence_penalty == 0.0
    assert cfg.stop is None


@pytest.mark.parametrize(
    "field,raw,expected",
    [
        ("temperature", 5.0, 2.0),
        ("temperature", -1.0, 0.0),
        ("top_p", 1.5, 1.0),
        ("top_p", -0.2, 0.0),
        ("frequency_penalty", 3.0, 2.0),
        ("presence_penalty", -7.5, -2.0),
        ("max_tokens", 0, 1),
        ("max_tokens", -40, 1),
    ],
)
def test_out_of_range_values_saturate(field, raw, expected):
    assert getattr(GenerationConfig.create(**{field: raw}), field) == expected
    builder = GenerationConfig.builder()
    getattr(builder, field)(raw)
    assert getattr(builder.build(), field) == expected


def test_in_range_values_kept():
    cfg = GenerationConfig.create(temperature=0.8, max_tokens=1000, top_p=0.5)
    assert (cfg.temperature, cfg.max_tokens, cfg.top_p) == (0.8, 1000, 0.5)


def test_builder_matches_create():
    built = (
        GenerationConfig.builder()
        .temperature(1.2)
        .max_tokens(64)
        .top_p(0.9)
        .frequency_penalty(0.5)
        .presence_penalty(-0.5)
        .stop(["END", "###"])
        .build()
    )
    created = GenerationConfig.create(
        temperature=1.2, max_tokens=64, top_p=0.9, frequency_penalty=0.5, presence_penalty=-0.5, stop=["END", "###"]
    )
    assert built == created


def test_unset_builder_fields_fall_back_to_defaults():
    assert GenerationConfig.builder().max_tokens(10).build() == GenerationConfig(max_tokens=10)


def test_config_is_immutable():
    cfg = GenerationConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.temperature = 1.0  # type: ignore[misc]


def test_stop_frozen_and_ordered():
    source = ["b", "a"]
    cfg = GenerationConfig.create(stop=source)
    source.append("c")
    assert cfg.stop == ("b", "a")
    assert cfg.to_payload()["stop"] == ["b", "a"]


def test_payload_omits_absent_stop():
    payload = GenerationConfig().to_payload()
    assert "stop" not in payload
    assert set(payload) == {"temperature", "max_tokens", "top_p", "frequency_penalty", "presence_penalty"}
