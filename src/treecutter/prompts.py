"""
treecutter.prompts - Interactive Answer Collection
==================================================

The context builder only needs a callable ``(name, default) -> str``.
This module provides the interactive one, built on questionary.
"""

from __future__ import annotations

from typing import Any

import questionary
import typer

from treecutter.context import coerce_value
from treecutter.errors import InvalidInputError
from treecutter.models import TemplateVariable


class QuestionaryPrompter:
    """
    Ask for each template variable on the terminal.

    An empty answer keeps the default. In strict mode, answers that don't
    parse as the default's type are rejected and the question is asked
    again.

    Parameters
    ----------
    strict : bool, default=False
        Validate answers with ``coerce_value(..., strict=True)``.

    Examples
    --------
    >>> ask = QuestionaryPrompter()
    >>> ask("project_name", "Demo")  # user presses enter
    ''
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def _validator(self, default: Any):
        def validate(answer: str) -> bool | str:
            try:
                coerce_value(default, answer, strict=True)
            except InvalidInputError as e:
                return e.message
            return True

        return validate

    def __call__(self, name: str, default: Any) -> str:
        variable = TemplateVariable(name=name, default=default)
        question = questionary.text(
            variable.prompt,
            validate=self._validator(default) if self.strict else None,
        )
        answer = question.ask()

        # questionary returns None on Ctrl-C
        if answer is None:
            raise typer.Abort()

        return answer
