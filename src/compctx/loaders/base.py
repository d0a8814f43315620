"""Base loader class and load outcome model.

Loaders never raise for a failed load: they return a LoadResult carrying
either the populated Context or the errors that prevented building it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from compctx.config import CompctxConfig
from compctx.context import Context
from compctx.errors import ContextError

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of a single load.

    Attributes:
        source: Path of the directory or archive that was loaded.
        status: "pass" when a Context was built, "fail" otherwise.
        context: The populated Context on success, None on failure.
        errors: Errors that caused the failure, empty on success.
    """

    source: str
    status: Literal["pass", "fail"]
    context: Context | None = None
    errors: list[ContextError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == "pass"

    @property
    def error(self) -> ContextError | None:
        """First error of a failed load, or None."""
        return self.errors[0] if self.errors else None

    def unwrap(self) -> Context:
        """Return the Context, raising the first error if the load failed.

        Raises:
            ContextError: If the load failed.
        """
        if self.context is None:
            if self.errors:
                raise self.errors[0]
            raise RuntimeError(f"Load of {self.source} produced no context")
        return self.context

    @classmethod
    def success(cls, source: str, context: Context) -> LoadResult:
        return cls(source=source, status="pass", context=context)

    @classmethod
    def failure(cls, source: str, errors: list[ContextError]) -> LoadResult:
        return cls(source=source, status="fail", errors=list(errors))


class LoadFailed(Exception):
    """Internal carrier for several errors found by one load."""

    def __init__(self, errors: list[ContextError]) -> None:
        self.errors = errors
        super().__init__("; ".join(str(e) for e in errors))


class BaseLoader(ABC):
    """Abstract base class for component loaders.

    Subclasses implement ``_load`` and raise ContextError (or LoadFailed for
    several errors at once); ``load`` turns that into a LoadResult.

    Attributes:
        config: Limits applied while loading.
    """

    name: str = "loader"

    def __init__(self, config: CompctxConfig | None = None) -> None:
        self.config = config or CompctxConfig()

    async def load(self, source: str | Path) -> LoadResult:
        """Load a component.

        Args:
            source: Path of the component directory or archive.

        Returns:
            LoadResult with the Context, or with the errors found.
        """
        source_str = str(source)
        logger.debug("%s: loading %s", self.name, source_str)
        try:
            context = await self._load(Path(source))
        except LoadFailed as e:
            logger.debug("%s: %s failed with %d errors", self.name, source_str, len(e.errors))
            return LoadResult.failure(source_str, e.errors)
        except ContextError as e:
            logger.debug("%s: %s failed: %s", self.name, e.kind, source_str)
            return LoadResult.failure(source_str, [e])

        logger.debug("%s: loaded %d files from %s", self.name, len(context.files), source_str)
        return LoadResult.success(source_str, context)

    @abstractmethod
    async def _load(self, source: Path) -> Context:
        """Build the Context for a source.

        Raises:
            ContextError: On a single failure.
            LoadFailed: When several failures are reported together.
        """
