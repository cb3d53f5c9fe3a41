from __future__ import annotations

import pytest

from graphcalc.plot_settings import DEFAULT_SETTINGS, PlotSettings


def test_defaults() -> None:
    assert DEFAULT_SETTINGS.sample_step == 0.25
    assert DEFAULT_SETTINGS.smoothing_step == 0.05
    assert DEFAULT_SETTINGS.default_domain == (-10.0, 10.0)
    assert DEFAULT_SETTINGS.default_canvas_size == (800, 500)


def test_replace_returns_validated_copy() -> None:
    coarse = DEFAULT_SETTINGS.replace(sample_step=0.5)
    assert coarse.sample_step == 0.5
    assert DEFAULT_SETTINGS.sample_step == 0.25

    with pytest.raises(ValueError):
        DEFAULT_SETTINGS.replace(sample_step=0.0)
    with pytest.raises(TypeError, match="Unknown plot setting"):
        DEFAULT_SETTINGS.replace(colour="red")


@pytest.mark.parametrize(
    "changes",
    [
        {"smoothing_step": 1.5},
        {"padding_fraction": -0.1},
        {"tick_count": 0},
        {"canvas_width": 0},
        {"default_domain": (1.0, -1.0)},
        {"flat_widening": float("nan")},
    ],
)
def test_invalid_settings_are_rejected(changes: dict) -> None:
    with pytest.raises(ValueError):
        PlotSettings(**changes)


def test_settings_are_frozen() -> None:
    with pytest.raises(AttributeError):
        DEFAULT_SETTINGS.sample_step = 1.0  # type: ignore[misc]
