"""
Base class for Value Objects.

Value Objects are immutable and compared by their attributes, never by
identity. Feedback payloads and metric snapshots are modelled this way.

Example:
    @dataclass(frozen=True)
    class LanguageCode(ValueObject):
        value: str

        def __post_init__(self) -> None:
            if len(self.value) < 2:
                raise ValidationError("Language code too short")
"""


class ValueObject:
    """
    Base class for Value Objects in the domain model.

    Subclasses should be decorated with @dataclass(frozen=True)
    and validate themselves in __post_init__.
    """

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.__dict__.items())))

    def to_primitive(self) -> object:
        """
        Convert to a primitive Python type for serialization.

        Single-attribute value objects collapse to that attribute.
        """
        values = list(self.__dict__.values())
        if len(values) == 1:
            return values[0]
        return dict(self.__dict__)
