"""Error taxonomy of the protocol object contract.

All of these are exceptions so they can be raised by the convenience wrappers,
but the core parse/patch operations return them inside ``Err`` values instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def with_article(kind: str) -> str:
    """``"an EVSE"``, ``"a location"``: the kind name with its indefinite article."""

    return f"{'an' if kind[:1].lower() in 'aeiou' else 'a'} {kind}"


class ContractError(Exception):
    """Base class for every error reported by the contract."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class IdentityError(ContractError):
    """A component of the compound identity is missing or conflicting."""

    def __init__(self, component: str, reason: str, message: str) -> None:
        super().__init__(message)
        self.component = component
        self.reason = reason


class MissingComponent(IdentityError):
    def __init__(self, component: str, *, label: str | None = None) -> None:
        super().__init__(component, "missing", f"The {label or component} is missing!")


class ConflictingComponent(IdentityError):
    def __init__(
        self,
        component: str,
        out_of_band: str,
        in_band: str,
        *,
        label: str | None = None,
    ) -> None:
        super().__init__(
            component,
            f"'{in_band}' does not match '{out_of_band}'",
            f"The optional {label or component} given within the JSON body "
            "does not match the one given in the URL!",
        )
        self.out_of_band = out_of_band
        self.in_band = in_band


class FieldError(ContractError):
    """A single wire field is missing or malformed.

    Nested failures keep the inner error as ``cause`` so the rendered message
    carries the full path, e.g. ``"connectors[1].standard": unsupported value 'FOO'``.
    """

    def __init__(
        self,
        field: str,
        reason: str | None = None,
        *,
        index: int | None = None,
        cause: FieldError | None = None,
    ) -> None:
        if reason is None and cause is None:
            raise ValueError("FieldError needs a reason or a nested cause")
        self.field = field
        self.index = index
        self.cause = cause
        self._reason = reason
        super().__init__(f'"{self.path}": {self.reason}')

    @property
    def segment(self) -> str:
        if self.index is None:
            return self.field
        return f"{self.field}[{self.index}]"

    @property
    def path(self) -> str:
        if self.cause is None:
            return self.segment
        return f"{self.segment}.{self.cause.path}"

    @property
    def reason(self) -> str:
        if self.cause is not None:
            return self.cause.reason
        return self._reason or ""


class ParseError(ContractError):
    """Wraps the first identity, field or invariant error found while parsing."""

    def __init__(self, kind: str, cause: ContractError) -> None:
        super().__init__(
            f"The given JSON representation of {with_article(kind)} is invalid: {cause.message}"
        )
        self.kind = kind
        self.cause = cause

    @property
    def field(self) -> str | None:
        """Wire path (or identity component) the error points at, if any."""

        if isinstance(self.cause, FieldError):
            return self.cause.path
        if isinstance(self.cause, IdentityError):
            return self.cause.component
        return None


class PatchError(ContractError):
    def __init__(self, kind: str, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.field = field


class BuildError(ContractError):
    def __init__(self, kind: str, warnings: Sequence[str]) -> None:
        self.kind = kind
        self.warnings = tuple(warnings)
        super().__init__(f"The given {kind} is incomplete: {' '.join(self.warnings)}")
