from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

pytest.importorskip("customtkinter")

from compressor.core.models import BatchResult, ProcessingParams  # noqa: E402
from compressor.ui.main_window import MainWindow  # noqa: E402


def make_window(converter) -> SimpleNamespace:
    window = SimpleNamespace(
        converter=converter,
        cancel_event=None,
        start_button=MagicMock(),
        cancel_button=MagicMock(),
        tabs=MagicMock(),
        logs=[],
    )
    window.after = lambda delay, callback: callback()
    window._log = window.logs.append
    window._on_progress = lambda done, total: None
    window._append_results = MagicMock()
    window._finish_compression = lambda result: MainWindow._finish_compression(window, result)
    return window


def test_buttons_restored_when_batch_crashes():
    converter = MagicMock()
    converter.run.side_effect = RuntimeError("worker exploded")
    window = make_window(converter)

    with pytest.raises(RuntimeError, match="worker exploded"):
        MainWindow._run_compression(window, [], ProcessingParams())

    window.start_button.configure.assert_called_with(state="normal")
    window.cancel_button.configure.assert_called_with(state="disabled")
    window._append_results.assert_not_called()
    assert "unexpected error" in window.logs[-1]


def test_results_shown_after_successful_batch():
    converter = MagicMock()
    converter.run.return_value = BatchResult(outcomes=[])
    window = make_window(converter)

    MainWindow._run_compression(window, [], ProcessingParams())

    window.start_button.configure.assert_called_with(state="normal")
    window._append_results.assert_called_once_with(converter.run.return_value)
    window.tabs.set.assert_called_once_with("Results")
    assert window.logs[-1].startswith("Done.")
