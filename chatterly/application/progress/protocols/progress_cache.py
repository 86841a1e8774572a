from collections.abc import Callable
from typing import Protocol

from chatterly.application.progress.use_cases.dtos import ProgressReport


class ProgressCacheProtocol(Protocol):
    def get(self, user_id: str) -> ProgressReport | None: ...

    def set(self, user_id: str, report: ProgressReport) -> None: ...

    def get_or_compute(
        self, user_id: str, compute: Callable[[], ProgressReport]
    ) -> ProgressReport: ...

    def invalidate(self, user_id: str) -> None: ...
