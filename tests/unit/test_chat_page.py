"""Unit tests for the chat page model selector options."""

import pytest_check as check

from src.agent.config import AVAILABLE_MODELS
from src.ui.chat_page import MODEL_OPTIONS, model_options


class TestModelOptions:
    def test_listed_model_keeps_its_label(self) -> None:
        value, label = AVAILABLE_MODELS[0]

        options = model_options(value)

        check.equal(options[value], label)
        check.equal(options, MODEL_OPTIONS)

    def test_unlisted_model_added_for_that_page_only(self) -> None:
        before = dict(MODEL_OPTIONS)

        options = model_options("custom-model")

        check.equal(options["custom-model"], "custom-model")
        check.is_not_in("custom-model", MODEL_OPTIONS)
        check.equal(MODEL_OPTIONS, before)
        check.is_not_in("custom-model", model_options(AVAILABLE_MODELS[0][0]))
