import builtins
from collections.abc import Callable, Iterable

import pytest


@pytest.fixture  # type: ignore[misc]
def feed_input(monkeypatch: pytest.MonkeyPatch) -> Callable[[Iterable[str]], list[str]]:
    """Replace `input()` with a scripted sequence of lines.

    Returns the list that collects every prompt shown. Running past the end of the
    script raises EOFError, just like a closed stdin.
    """

    def install(lines: Iterable[str]) -> list[str]:
        prompts: list[str] = []
        remaining = iter(lines)

        def fake_input(prompt: str = "") -> str:
            prompts.append(prompt)
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr(builtins, "input", fake_input)
        return prompts

    return install
