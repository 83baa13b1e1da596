"""Builder values for protocol entities.

A builder carries only the fields actually supplied so far and reports every
missing mandatory field at once when asked to ``build``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .codecs import utc_now
from .descriptors import descriptors_of
from .errors import BuildError
from .result import Err, Ok

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from .result import Result
    from .wire import WireObject


@dataclass(frozen=True)
class Builder[W: WireObject]:
    target: type[W]
    values: Mapping[str, Any] = field(default_factory=dict)

    def set(self, **values: Any) -> Builder[W]:
        return Builder(self.target, {**self.values, **values})

    def unset(self, *names: str) -> Builder[W]:
        return Builder(self.target, {k: v for k, v in self.values.items() if k not in names})

    def build(self, *, now: datetime | None = None) -> Result[W, BuildError]:
        kind = self.target.KIND
        descriptors = descriptors_of(self.target)
        known = {descriptor.attr for descriptor in descriptors}
        warnings = [f"Unknown field '{name}'!" for name in self.values if name not in known]

        values = dict(self.values)
        for descriptor in descriptors:
            if values.get(descriptor.attr) is not None:
                continue
            if descriptor.defaults_to_now:
                values[descriptor.attr] = now or utc_now()
            elif descriptor.required:
                warnings.append(f"The {descriptor.label} must not be null or empty!")
            else:
                values[descriptor.attr] = descriptor.empty()

        if warnings:
            return Err(BuildError(kind, warnings))
        built = self.target(**values)
        violation = built.validate()
        if violation is not None:
            return Err(BuildError(kind, [violation.message]))
        return Ok(built)
