from __future__ import annotations
from typing import Generator, Iterable, Literal, Optional, TypeVar
import sys
from tqdm import tqdm

T = TypeVar("T")


class ProgressReporter:
    """Receives the progress events of a pipeline run.  This base
    reporter only counts them."""

    def __init__(self) -> None:
        self.total = 0
        self.done = 0

    def start_(self, total: int, unit: str = "it"):
        self.total = total
        self.done = 0

    def advance_(self, n: int = 1):
        self.done += n

    def describe_(self, description: str):
        pass

    def close_(self):
        pass

    def step_reporter(self) -> ProgressReporter:
        """Reporter given to the steps, to report their progress over
        the mentions of a document"""
        return ProgressReporter()


class TQDMProgressReporter(ProgressReporter):
    """Shows the steps of a pipeline run as a tqdm bar.  The progress
    of the current step over mentions is shown as the bar postfix."""

    def __init__(self) -> None:
        super().__init__()
        self.bar: Optional[tqdm] = None

    def start_(self, total: int, unit: str = "it"):
        super().start_(total, unit)
        self.close_()
        self.bar = tqdm(total=total, unit=unit)

    def advance_(self, n: int = 1):
        super().advance_(n)
        if not self.bar is None:
            self.bar.update(n)

    def describe_(self, description: str):
        if not self.bar is None:
            self.bar.set_description_str(description)

    def close_(self):
        if not self.bar is None:
            self.bar.close()
            self.bar = None

    def step_reporter(self) -> ProgressReporter:
        return TQDMMentionsReporter(self)


class TQDMMentionsReporter(ProgressReporter):
    def __init__(self, parent: TQDMProgressReporter) -> None:
        super().__init__()
        self.parent = parent

    def advance_(self, n: int = 1):
        super().advance_(n)
        if not self.parent.bar is None:
            self.parent.bar.set_postfix(mentions=f"{self.done}/{self.total}")


def track(
    reporter: ProgressReporter,
    it: Iterable[T],
    total: Optional[int] = None,
    unit: str = "it",
) -> Generator[T, None, None]:
    """Yield the elements of ``it``, reporting each of them to
    ``reporter`` once consumed

    :param total: number of elements of ``it``.  If ``None``,
        ``len(it)`` is used.
    """
    if total is None:
        total = len(it)  # type: ignore
    reporter.start_(total, unit)
    for elt in it:
        yield elt
        reporter.advance_(1)


def get_progress_reporter(name: Optional[Literal["tqdm"]]) -> ProgressReporter:
    if name == "tqdm":
        return TQDMProgressReporter()
    if not name is None:
        print(f"[warning] unknown progress reporter: {name}", file=sys.stderr)
    return ProgressReporter()
