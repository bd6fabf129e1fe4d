"""Ordered registry of data migration steps."""

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass

from fedimigrate.models.version import is_older, parse_version

StepFunc = Callable[[], Awaitable[None]]


@dataclass(frozen=True)
class MigrationStep:
    """
    A data transformation for stores older than ``threshold``.

    ``apply`` must be idempotent: there is no per-step record of
    completion, so an interrupted run repeats every step it reaches.
    """

    threshold: str
    apply: StepFunc
    name: str

    def applies_to(self, version: str) -> bool:
        """Whether a store at version still needs this step."""
        return is_older(version, self.threshold)


class StepRegistry:
    """
    Migration steps in strictly ascending threshold order.

    Later steps may assume earlier ones already transformed the data,
    so out-of-order registration is rejected.
    """

    def __init__(self) -> None:
        self._steps: list[MigrationStep] = []

    def register(self, threshold: str, apply: StepFunc, name: str | None = None) -> MigrationStep:
        """
        Append a step.

        Args:
            threshold: Stores older than this version run the step.
            apply: Zero-argument coroutine function doing the work.
            name: Label for logs; defaults to the function name.

        Returns:
            The registered step.

        Raises:
            ValueError: If threshold does not exceed the last one registered.
        """
        parsed = parse_version(threshold)
        if self._steps and parsed <= parse_version(self._steps[-1].threshold):
            raise ValueError(
                f"Step threshold {threshold} must be greater than "
                f"{self._steps[-1].threshold}"
            )

        step = MigrationStep(
            threshold=threshold,
            apply=apply,
            name=name or getattr(apply, "__name__", threshold),
        )
        self._steps.append(step)
        return step

    def pending(self, version: str) -> list[MigrationStep]:
        """Return the steps a store at version needs, oldest first."""
        return [step for step in self._steps if step.applies_to(version)]

    def __iter__(self) -> Iterator[MigrationStep]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)
