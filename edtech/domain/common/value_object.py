"""
Base class for value objects.

Emails, names and typed ids carry no identity of their own: two instances
with the same fields are interchangeable, so they compare and hash by value.
Validation happens once, at construction, and raises ``ValidationError``.

Example:
    @dataclass(frozen=True, eq=False)
    class Email(ValueObject):
        value: str

        def __post_init__(self) -> None:
            if "@" not in self.value:
                raise ValidationError("Invalid email format", field="email")
"""


class ValueObject:
    """
    Immutable value compared field by field.

    Subclasses are ``@dataclass(frozen=True, eq=False)`` so the comparison
    here wins over the generated one, and an ``EntityId`` never equals a
    different id type holding the same UUID.
    """

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash((type(self).__name__, *self.__dict__.values()))

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"{type(self).__name__}({attrs})"

    def to_primitive(self) -> object:
        """
        Plain form used in event payloads.

        Single-field values such as ids and emails collapse to that field;
        a ``UserName`` becomes a dict of its parts.
        """
        values = list(self.__dict__.values())
        if len(values) == 1:
            return values[0]
        return dict(self.__dict__)
