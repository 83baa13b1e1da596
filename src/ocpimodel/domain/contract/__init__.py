"""Protocol object contract: identity, field extraction, serialization and patching."""

from __future__ import annotations

from .builder import Builder
from .descriptors import (
    FieldDescriptor,
    FieldKind,
    Mutability,
    collection,
    descriptors_of,
    enum,
    identity_field,
    last_updated,
    scalar,
    struct,
    timestamp,
)
from .errors import (
    BuildError,
    ConflictingComponent,
    ContractError,
    FieldError,
    IdentityError,
    MissingComponent,
    ParseError,
    PatchError,
)
from .fields import ABSENT, Absent
from .identity import (
    Identity,
    PartialIdentity,
    compare_identity,
    identity_key,
    resolve,
    same_identity,
)
from .patch import PatchOutcome, apply_patch, merge_patch_json
from .result import Err, Ok, Result
from .serializer import dumps, serialize
from .wire import ProtocolEntity, WireObject

__all__ = [  # noqa: RUF022
    # results and errors
    "Ok",
    "Err",
    "Result",
    "ContractError",
    "IdentityError",
    "MissingComponent",
    "ConflictingComponent",
    "FieldError",
    "ParseError",
    "PatchError",
    "BuildError",
    # identity
    "PartialIdentity",
    "Identity",
    "resolve",
    "identity_key",
    "compare_identity",
    "same_identity",
    # field declarations
    "ABSENT",
    "Absent",
    "FieldDescriptor",
    "FieldKind",
    "Mutability",
    "descriptors_of",
    "scalar",
    "identity_field",
    "enum",
    "struct",
    "collection",
    "timestamp",
    "last_updated",
    # objects
    "WireObject",
    "ProtocolEntity",
    "Builder",
    "PatchOutcome",
    "apply_patch",
    "merge_patch_json",
    "serialize",
    "dumps",
]
