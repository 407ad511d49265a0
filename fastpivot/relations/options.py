# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RelationOptions:
    """
    Configuration of one many-to-many relation exposed by a dispatcher.

    Attributes:
        relation: Name of the relation on the resource model
        pivot_fillable: Pivot fields allowed to be written
        pivot_json: Pivot fields holding JSON, decoded when read
        includes: Relations the client may eager load with the include param
        authorize: Run the authorization check, None uses the settings default
    """

    relation: str
    pivot_fillable: tuple[str, ...] = field(default_factory=tuple)
    pivot_json: tuple[str, ...] = field(default_factory=tuple)
    includes: tuple[str, ...] = field(default_factory=tuple)
    authorize: bool | None = None

    def __post_init__(self):
        if not self.relation:
            raise ValueError("A relation name is required")

        # Accept any iterable of names and freeze it
        for name in ("pivot_fillable", "pivot_json", "includes"):
            object.__setattr__(self, name, tuple(getattr(self, name)))


__all__ = [
    "RelationOptions",
]
