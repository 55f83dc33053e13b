"""Transformer contract and sequential composition."""

from __future__ import annotations

from typing import Iterable, Tuple

from ..models import Run


class RunTransformer:
    """Reshapes the metrics of a run into a new run.

    Implementations are pure: they never mutate their input and always
    return a run whose spectrum matches its segments.
    """

    def transform(self, run: Run) -> Run:  # pragma: no cover - interface
        raise NotImplementedError

    def __call__(self, run: Run) -> Run:
        return self.transform(run)


class TransformerChain(RunTransformer):
    """Applies transformers left to right, feeding each the previous output.

    The chain is a transformer itself, so it can be nested.
    """

    def __init__(self, transformers: Iterable[RunTransformer] = ()):
        self.transformers: Tuple[RunTransformer, ...] = tuple(transformers)

    def transform(self, run: Run) -> Run:
        for transformer in self.transformers:
            run = transformer.transform(run)
        return run

    def append(self, transformer: RunTransformer) -> "TransformerChain":
        return TransformerChain(self.transformers + (transformer,))

    def __len__(self) -> int:
        return len(self.transformers)

    def __repr__(self) -> str:
        names = ", ".join(type(t).__name__ for t in self.transformers)
        return f"TransformerChain([{names}])"
